"""
Pytest configuration for the aboki project.

This file makes sure the src/ layout is importable as `aboki`
when running tests, and provides a sample market rates page.
"""

import sys
from pathlib import Path

import pytest

# Project root directory (one level above tests/)
ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"

# Add src/ to sys.path so `import aboki` works
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


SAMPLE_HTML = """\
<html>
  <head><title>AbokiFX - Lagos Market Rates</title></head>
  <body>
    <div class="lagos-market-rates">
      <table>
        <tr><td>Date</td><td>USD NGN</td><td>GBP NGN</td><td>EUR NGN</td></tr>
        <tr><td></td><td>Buy / Sell</td><td>Buy / Sell</td><td>Buy / Sell</td></tr>
        <tr><td>25/12/2023</td><td>755 / 765*</td><td>400 / 410**</td><td>470 / 480***</td></tr>
        <tr><td>24/12/2023</td><td>750 / 760***</td><td>395 / 405***</td><td>465 / 475***</td></tr>
      </table>
    </div>
    <div class="footer"><table><tr><td>30/11/2023</td><td>1 / 2</td></tr></table></div>
  </body>
</html>
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML
