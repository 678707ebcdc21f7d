"""
Structured Reference String (SRS)와 청크 커밋
==============================================

SRS = {
    G1 powers: [G1, τ·G1, τ²·G1, ..., τ^(d-1)·G1]   (d = size)
    G2 powers: [G2, τ·G2]
}

**청크 커밋 (commit)**:
  계수 개수가 SRS 크기 d를 넘는 다항식도 커밋할 수 있다.
  계수를 d개씩 잘라 각 청크 fⱼ를 C_j = Σ cᵢ·[τⁱ]₁ 로 커밋하고,
  결과 PolyComm은 청크 수 ceil(계수 개수 / d)개의 점을 가진다.

  평가 테이블도 같은 분할을 따른다: evaluate_chunks(poly, d, z) = [f₀(z), f₁(z), ...]

**보안**:
  τ를 아는 사람은 바인딩을 깰 수 있다. 여기서는 seed에서 결정론적으로
  τ를 만든다 (테스트/학습용). seed가 없으면 secrets로 뽑는다.

사용 예시:
    >>> srs = SRS.generate(max_degree=3, seed=42)   # size = 4
    >>> comm = commit(Polynomial([FR(i) for i in range(6)]), srs)
    >>> len(comm)  # 2 청크
"""

import hashlib
import logging
import secrets

from zkp.polycomm.combine import window_msm
from zkp.polycomm.commitment import PolyComm
from zkp.polycomm.field import FR, G1, G2, ec_mul, CURVE_ORDER

logger = logging.getLogger(__name__)


class SRS:
    """커밋먼트용 공개 파라미터.

    속성:
        g1_powers: [G1, τ·G1, ..., τ^max_degree·G1]
        g2_powers: [G2, τ·G2]
        max_degree: 한 청크가 가질 수 있는 최대 차수
    """

    def __init__(self, g1_powers, g2_powers, max_degree):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers
        self.max_degree = max_degree

    @property
    def size(self):
        """청크 하나가 담을 수 있는 계수 개수 (max_degree + 1)."""
        return len(self.g1_powers)

    @classmethod
    def generate(cls, max_degree, seed=None):
        """SRS를 생성한다.

        Args:
            max_degree: 청크당 최대 차수 (G1 powers는 max_degree + 1개)
            seed: 결정론적 생성을 위한 시드

        Returns:
            SRS
        """
        if max_degree < 0:
            raise ValueError(f"max_degree는 0 이상이어야 합니다: {max_degree}")

        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % CURVE_ORDER
        else:
            tau_int = secrets.randbelow(CURVE_ORDER - 1) + 1
        tau = FR(tau_int)

        g1_powers = []
        tau_power = FR(1)
        for _ in range(max_degree + 1):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        g2_powers = [G2, ec_mul(G2, tau)]

        logger.debug("generated SRS with %d G1 powers", len(g1_powers))
        return cls(g1_powers, g2_powers, max_degree)


def chunk_polynomial(poly, size):
    """poly를 계수 size개씩 잘라 청크 다항식 리스트로 만든다 (최소 1개)."""
    return poly.chunks(size)


def commit_chunk(chunk, srs):
    """청크 다항식 하나를 G1 점으로 커밋한다: Σ cᵢ · [τⁱ]₁.

    Raises:
        ValueError: 청크의 계수 개수가 SRS 크기를 넘을 때
    """
    if len(chunk.coeffs) > srs.size:
        raise ValueError(
            f"다항식 차수 {chunk.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )
    return window_msm(srs.g1_powers[:len(chunk.coeffs)], chunk.coeffs)


def commit(poly, srs):
    """다항식을 청크 단위로 커밋한다.

    Returns:
        PolyComm: 청크 수 = ceil(len(poly.coeffs) / srs.size)
    """
    chunks = chunk_polynomial(poly, srs.size)
    return PolyComm([commit_chunk(chunk, srs) for chunk in chunks])


def evaluate_chunks(poly, size, point):
    """각 청크 다항식을 point에서 평가한 값 리스트 [f₀(z), f₁(z), ...]."""
    return [chunk.evaluate(point) for chunk in chunk_polynomial(poly, size)]
