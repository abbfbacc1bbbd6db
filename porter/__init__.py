"""
PORTER - Proposal Output Rendering for Travel Engagement Records

Renders structured travel itineraries into client-facing HTML proposals using
a small, fixed template language.

Architecture:
- Intake Context: Trip data repair, enrichment and render-context assembly
- Templating Context: Template resolution and interpretation
- Rendering Context: End-to-end orchestration and trial watermarking
"""

__version__ = "0.1.0"
