"""Trial watermark for proposals rendered on trial subscriptions."""

import re

from porter.utils.settings import RenderSettings

BODY_CLOSE_RE = re.compile(r"</body>", re.IGNORECASE)

WATERMARK_TEMPLATE = """
<style>
  .porter-trial-watermark {{
    position: fixed;
    bottom: 0;
    left: 0;
    right: 0;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: white;
    text-align: center;
    padding: 10px 20px;
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    font-size: 14px;
    z-index: 99999;
    box-shadow: 0 -2px 10px rgba(0,0,0,0.1);
  }}
  .porter-trial-watermark a {{
    color: white;
    text-decoration: underline;
    font-weight: 600;
  }}
</style>
<div class="porter-trial-watermark">
  Created with {product} (Trial) &middot; <a href="{url}" target="_blank">Start your free trial</a>
</div>
"""


def trial_watermark(settings: RenderSettings) -> str:
    """Watermark block naming the product and linking to its site."""
    return WATERMARK_TEMPLATE.format(product=settings.product_name, url=settings.watermark_url)


def inject_trial_watermark(html: str, watermark: str) -> str:
    """
    Insert a watermark right before the last </body> (any case), or append it.

    Examples:
        >>> inject_trial_watermark("<body>x</BODY>", "[W]")
        '<body>x[W]</BODY>'
        >>> inject_trial_watermark("<p>x</p>", "[W]")
        '<p>x</p>[W]'
    """
    matches = list(BODY_CLOSE_RE.finditer(html))
    if not matches:
        return html + watermark
    body_close = matches[-1].start()
    return html[:body_close] + watermark + html[body_close:]
