"""
커밋먼트 기반 모듈: 유한체(Finite Field) 및 G1 그룹 연산
==========================================================

다항식 커밋먼트 계층 전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR / FQ**:
  - FR: bn128 곡선의 스칼라 필드 (scalar field). 커밋먼트에 곱해지는 모든
    스칼라(polyscale, evalscale, 챌린지 등)의 산술 단위이다.
  - FQ: bn128 곡선의 베이스 필드 (base field). G1 점의 좌표 (x, y)가 속한다.

**G1 그룹 연산**:
  py_ecc의 아핀(affine) 표현을 그대로 사용한다. 무한원점(항등원)은 None이다.

**엔도모피즘 (Endomorphism)**:
  bn128은 j-invariant가 0인 곡선(y² = x³ + 3)이므로
  φ(x, y) = (β·x, y) 가 그룹 준동형이 된다 (β³ = 1, β ≠ 1, β ∈ FQ).
  또한 φ(P) = λ·P 를 만족하는 λ ∈ FR (λ³ = 1) 가 존재한다.
  - ENDO_Q = β : 베이스 필드 상수 (점에 적용)
  - ENDO_R = λ : 스칼라 필드 상수 (prechallenge를 스칼라로 접을 때 사용)
  두 상수는 하드코딩하지 않고 모듈 로드 시 세제곱근을 찾아 생성자 G1에 대해
  φ(G1) == λ·G1 을 확인하여 짝을 맞춘다.

사용 예시:
    >>> from zkp.polycomm.field import FR, G1, ec_mul, endo, ENDO_R
    >>> endo(G1) == ec_mul(G1, ENDO_R)  # True
"""

import logging

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field)
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> FR(3) * FR(5)    # FR(15)
        >>> FR(1) / FR(3)    # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


# 스칼라 필드 위수 r
CURVE_ORDER = bn128.curve_order

# 베이스 필드 위수 q
FIELD_MODULUS = bn128.field_modulus


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2

# bn128에서 G1의 항등원은 None으로 표현
Z1 = None


def ec_add(p1, p2):
    """G1/G2 점 덧셈: p1 + p2. 무한원점(None)을 허용한다."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """점의 역원: -point."""
    if point is None:
        return None
    return bn128.neg(point)


def ec_sub(p1, p2):
    """점 뺄셈: p1 - p2."""
    return bn128.add(p1, ec_neg(p2))


def ec_double(point):
    """점 배가: 2·point."""
    if point is None:
        return None
    return bn128.double(point)


def ec_mul(point, scalar):
    """스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점 (None 허용)
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point (같은 그룹의 점)
    """
    if point is None:
        return None
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    return bn128.pairing(g2_point, g1_point)


def is_on_curve(point):
    """G1 점이 곡선 y² = x³ + 3 위에 있는지 확인한다. 무한원점은 True."""
    if point is None:
        return True
    return bn128.is_on_curve(point, bn128.b)


# ─────────────────────────────────────────────────────────────────────
# 엔도모피즘 상수
# ─────────────────────────────────────────────────────────────────────

def _cube_root_of_unity(modulus):
    """modulus ≡ 1 (mod 3)인 소수체에서 1이 아닌 세제곱근을 찾는다.

    g^((p-1)/3) 은 항상 세제곱근이며, g가 세제곱 비잉여(non-residue)이면 1이 아니다.
    """
    for g in range(2, modulus):
        root = pow(g, (modulus - 1) // 3, modulus)
        if root != 1:
            return root
    raise ArithmeticError(f"세제곱근이 존재하지 않습니다: {modulus}")


def _endo_coefficients():
    """(ENDO_Q, ENDO_R)를 φ(G1) == ENDO_R · G1 이 되도록 짝지어 반환한다."""
    endo_q = FQ(_cube_root_of_unity(FIELD_MODULUS))
    lam = _cube_root_of_unity(CURVE_ORDER)

    x, y = G1
    target = (x * endo_q, y)
    # λ와 λ² 중 정확히 하나가 β에 대응한다
    for candidate in (lam, lam * lam % CURVE_ORDER):
        if bn128.multiply(G1, candidate) == target:
            logger.debug("endomorphism coefficients found: lambda=%#x", candidate)
            return endo_q, FR(candidate)
    raise ArithmeticError("엔도모피즘 스칼라 λ를 찾지 못했습니다")


ENDO_Q, ENDO_R = _endo_coefficients()


def endo(point, endo_q=ENDO_Q):
    """엔도모피즘 φ(x, y) = (β·x, y). φ(P) = ENDO_R · P."""
    if point is None:
        return None
    x, y = point
    return (x * endo_q, y)
