# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from datetime import date
from pathlib import Path

import pytest

from roster_import.logging.init import LOGGER_NAME, reset_logging

SAMPLE_HTML = """<html><body>
<p>ICU ASSIGNMENTS</p>
<table>
  <tr>
    <td><p>Friday, April 4th, 2025</p></td>
    <td><p>7A-7P</p></td>
    <td><p>PCT'S: Ann, Bob</p></td>
    <td><p><strong>CHARGE NURSE:</strong> #7501</p></td>
  </tr>
  <tr>
    <td><p>TEAM A</p></td>
    <td><p>7P-7A</p></td>
    <td><p>PCT'S: Cat</p></td>
    <td><p><strong>CHARGE NURSE:</strong> #7601</p></td>
  </tr>
</table>
<table>
  <tr>
    <th><p>RM</p></th><th><p>PREC</p></th><th><p>PATIENT</p></th><th><p>MRN</p></th>
    <th><p>STATUS</p></th><th><p>RN</p><p>DAYS</p></th><th><p>EXT</p></th>
    <th><p>RN</p><p>NIGHTS</p></th><th><p>EXT</p></th>
  </tr>
  <tr>
    <td>501</td><td>C</td><td>A. Smith</td><td>100001</td><td>Vent</td>
    <td>#7502</td><td>4411</td><td>#7602</td><td>4412</td>
  </tr>
  <tr>
    <td></td><td></td><td></td><td></td><td></td><td></td><td></td><td></td><td></td>
  </tr>
  <tr>
    <td>512</td><td></td><td>J. Doe</td><td>100002</td><td>Respiratory failure</td>
    <td>#7503</td><td>4413</td><td>#7603</td><td>4414</td>
  </tr>
</table>
<table>
  <tr>
    <td><p>RESPIRATORY THERAPISTS</p></td><td><p>FLOATS (DAYS)</p></td><td><p>FLOATS (NIGHTS)</p></td>
  </tr>
  <tr>
    <td><p>Rita</p><p>Sam</p></td><td><p>Dana</p><p>Eli</p></td><td><p>Fay</p></td>
  </tr>
</table>
</body></html>
"""

NO_GRID_HTML = """<html><body>
<table><tr><td>CHARGE NURSE: #7501</td><td>7A-7P</td></tr></table>
<table><tr><td>notes</td><td>nothing to see</td></tr></table>
</body></html>
"""


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ROSTER_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
timezone: UTC
room_range:
  start: 501
  end: 532
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "roster.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture()
def no_grid_html() -> str:
    return NO_GRID_HTML


@pytest.fixture()
def fixed_clock():
    return lambda: date(2024, 1, 2)


@pytest.fixture(autouse=True)
def _clean_app_logger():
    # handlers bound to a finished test's captured stdout must not leak
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
