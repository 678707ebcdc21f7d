"""
고정 윈도우 다중 스칼라 곱셈 (Fixed-window MSM)
=================================================

커밋먼트 검증에서 가장 비싼 연산은 Σ sᵢ·Pᵢ 형태의 다중 스칼라 곱셈이다.
점마다 double-and-add를 따로 하면 점 개수 × 254번의 배가(doubling)가 필요하지만,
윈도우 방식(Straus)은 모든 점이 배가를 공유한다:

  1. 각 점 P에 대해 [0, P, 2P, ..., (2^w - 1)P] 테이블을 만든다.
  2. 스칼라를 w비트 윈도우로 잘라 최상위 윈도우부터 내려오면서
     acc ← 2^w · acc + Σ table_i[digit_i]

**엔도모피즘 사다리 (endo_combine_one)**:
  prechallenge r (128비트)를 FR 스칼라로 펼치지 않고 바로 점에 적용한다.
  acc = 2·(φ(P) + P) 에서 시작하여 두 비트씩 읽으며
      acc ← 2·acc + (r_{2i+1} ? φ : id)((r_{2i} ? 1 : -1) · P)
  결과는 ScalarChallenge.to_field(ENDO_R) · P 와 같다.
  배가 횟수가 64번이므로 전체 스칼라 곱의 절반 이하 비용이다.
"""

import logging

from zkp.polycomm.field import CURVE_ORDER, ec_add, ec_double, ec_neg, endo
from zkp.polycomm.params import CHALLENGE_LENGTH_IN_BITS, WINDOW_BITS

logger = logging.getLogger(__name__)


def _window_table(point, window_bits):
    """[0·P, 1·P, ..., (2^w - 1)·P] 테이블."""
    table = [None, point]
    for _ in range(2, 1 << window_bits):
        table.append(ec_add(table[-1], point))
    return table


def window_msm(points, scalars, window_bits=WINDOW_BITS):
    """Σ scalars[i] · points[i] 를 공유 배가 윈도우 방식으로 계산한다.

    Args:
        points: G1 점 리스트 (None 허용)
        scalars: FR 또는 정수 리스트

    Returns:
        G1 점 (빈 입력이면 None)

    Raises:
        ValueError: 두 리스트의 길이가 다를 때
    """
    if len(points) != len(scalars):
        raise ValueError(
            f"점 개수 {len(points)}와 스칼라 개수 {len(scalars)}가 다릅니다"
        )

    terms = []
    for point, scalar in zip(points, scalars):
        s = int(scalar) % CURVE_ORDER
        if point is None or s == 0:
            continue
        terms.append((s, _window_table(point, window_bits)))

    if not terms:
        return None

    mask = (1 << window_bits) - 1
    num_bits = max(s.bit_length() for s, _ in terms)
    num_windows = (num_bits + window_bits - 1) // window_bits

    acc = None
    for k in reversed(range(num_windows)):
        for _ in range(window_bits):
            acc = ec_double(acc)
        shift = k * window_bits
        for s, table in terms:
            digit = (s >> shift) & mask
            if digit:
                acc = ec_add(acc, table[digit])
    return acc


def window_combine(g1, g2, x1, x2, window_bits=WINDOW_BITS):
    """원소별 x1·g1[i] + x2·g2[i]."""
    if len(g1) != len(g2):
        raise ValueError(f"점 리스트 길이가 다릅니다: {len(g1)} != {len(g2)}")
    return [
        window_msm([a, b], [x1, x2], window_bits)
        for a, b in zip(g1, g2)
    ]


def window_combine_one(g1, g2, x2, window_bits=WINDOW_BITS):
    """x1 = 1 특수화: g1[i] + x2·g2[i]. g1 쪽 테이블은 만들지 않는다."""
    if len(g1) != len(g2):
        raise ValueError(f"점 리스트 길이가 다릅니다: {len(g1)} != {len(g2)}")
    return [
        ec_add(a, window_msm([b], [x2], window_bits))
        for a, b in zip(g1, g2)
    ]


def endo_combine_one(g1, g2, prechallenge, endo_q,
                     length_in_bits=CHALLENGE_LENGTH_IN_BITS):
    """g1[i] + to_field(prechallenge)·g2[i] 를 엔도모피즘 사다리로 계산한다.

    Args:
        g1, g2: 같은 길이의 G1 점 리스트
        prechallenge: 정수 또는 FR (하위 length_in_bits 비트만 사용)
        endo_q: 베이스 필드 엔도모피즘 상수 β
        length_in_bits: 사용할 비트 수 (짝수)
    """
    if len(g1) != len(g2):
        raise ValueError(f"점 리스트 길이가 다릅니다: {len(g1)} != {len(g2)}")

    bits = int(prechallenge)
    result = []
    for base, point in zip(g1, g2):
        phi = endo(point, endo_q)
        neg_point = ec_neg(point)
        neg_phi = ec_neg(phi)

        # a = b = 2  ↔  2·(φ(P) + P)
        acc = ec_double(ec_add(point, phi))
        for i in reversed(range(length_in_bits // 2)):
            positive = (bits >> (2 * i)) & 1
            if (bits >> (2 * i + 1)) & 1:
                term = phi if positive else neg_phi
            else:
                term = point if positive else neg_point
            acc = ec_add(ec_double(acc), term)

        result.append(ec_add(base, acc))
    logger.debug("endo_combine_one: %d points", len(result))
    return result
