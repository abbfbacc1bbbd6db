"""Unit tests for trial watermark injection."""

import pytest

from porter.contexts.rendering.watermark import inject_trial_watermark, trial_watermark
from porter.utils.settings import RenderSettings


@pytest.mark.unit
@pytest.mark.parametrize(
    "html, expected",
    [
        ("<body>x</body>", "<body>x[W]</body>"),
        ("<body>x</BODY>", "<body>x[W]</BODY>"),
        ("<p>x</p>", "<p>x</p>[W]"),
        ("<body><pre></body></pre></body>", "<body><pre></body></pre>[W]</body>"),
        ("<body>Réunion</body>", "<body>Réunion[W]</body>"),
    ],
)
def test_inject_trial_watermark(html, expected):
    """Inserted before the last closing body tag, or appended."""
    assert inject_trial_watermark(html, "[W]") == expected


@pytest.mark.unit
def test_trial_watermark_names_product():
    """The block names the product and links to its site."""
    block = trial_watermark(RenderSettings(product_name="Acme", watermark_url="https://acme.example"))
    assert "Created with Acme (Trial)" in block
    assert 'href="https://acme.example"' in block
    assert ".porter-trial-watermark {" in block
