import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.polycomm.field import FR, G1, ec_mul
from zkp.polycomm.srs import SRS


# ── 테스트 상수 ──
SRS_SEED = 42
SMALL_MAX_DEGREE = 3   # 청크당 계수 4개


@pytest.fixture(scope="session")
def srs_small():
    """Small SRS (size 4) so that 5+ coefficient polynomials get chunked."""
    return SRS.generate(max_degree=SMALL_MAX_DEGREE, seed=SRS_SEED)


@pytest.fixture(scope="session")
def points():
    """A handful of distinct G1 points k·G1."""
    return [ec_mul(G1, FR(k)) for k in (2, 3, 5, 7, 11)]
