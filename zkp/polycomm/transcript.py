"""
Fiat-Shamir 트랜스크립트와 챌린지 유도
=======================================

**Sponge 인터페이스 (FqSponge)**:
  커밋먼트 계층은 스펀지를 absorb/squeeze 두 능력으로만 사용한다.
  - absorb_g(points): G1 점(커밋먼트 청크)을 흡수
  - absorb_fr(scalars): 스칼라(평가값)를 흡수
  - challenge(): 128비트 prechallenge를 짜낸다
  - digest(): 전체 폭의 FR 원소를 짜낸다

**Prechallenge와 엔도모피즘 폴딩**:
  squeeze로 얻은 128비트 값 r은 곧바로 스칼라로 쓰지 않는다.
  ScalarChallenge(r).to_field(ENDO_R)는 r의 비트 쌍을 읽어
  a·λ + b 형태의 FR 원소로 "접는다" (λ = ENDO_R).
  같은 r을 점에 직접 적용하는 엔도모피즘 사다리(combine_one_endo)와
  정확히 같은 스칼라를 만든다.

**순서가 곧 프로토콜이다**:
  absorb/squeeze 순서와 커밋먼트 청크 순서가 Prover와 Verifier 사이에서
  비트 단위로 같아야 같은 챌린지가 나온다.

사용 예시:
    >>> sponge = Sha256Sponge()
    >>> absorb_commitment(sponge, comm)
    >>> polyscale = squeeze_challenge(ENDO_R, sponge)
"""

import hashlib
import logging

from zkp.polycomm.curve import BN128
from zkp.polycomm.field import FR, CURVE_ORDER
from zkp.polycomm.params import CHALLENGE_LENGTH_IN_BITS, TRANSCRIPT_LABEL

logger = logging.getLogger(__name__)


class FqSponge:
    """커밋먼트 계층이 사용하는 스펀지 능력 집합."""

    def absorb_g(self, points):
        raise NotImplementedError

    def absorb_fr(self, scalars):
        raise NotImplementedError

    def challenge(self):
        raise NotImplementedError

    def digest(self):
        raise NotImplementedError


class Sha256Sponge(FqSponge):
    """SHA-256 해시 체인 기반 스펀지.

    흡수한 바이트를 state에 누적하고, squeeze할 때마다
    SHA-256(state)를 계산하여 그 다이제스트를 다시 state에 붙인다 (체이닝).
    따라서 같은 값을 두 번 짜내도 서로 다른 챌린지가 나온다.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열
    """

    def __init__(self, label=TRANSCRIPT_LABEL, curve=None):
        self.state = bytearray()
        self.state.extend(label)
        self.curve = curve if curve is not None else BN128

    def absorb_g(self, points):
        """G1 점들을 순서대로 흡수한다. 무한원점은 64바이트의 0."""
        for point in points:
            coords = self.curve.to_coordinates(point)
            if coords is None:
                self.state.extend(b"\x00" * 64)
            else:
                x, y = coords
                self.state.extend(int(x).to_bytes(32, "big"))
                self.state.extend(int(y).to_bytes(32, "big"))

    def absorb_fr(self, scalars):
        """FR 스칼라들을 32바이트 빅엔디안으로 흡수한다."""
        for scalar in scalars:
            self.state.extend((int(scalar) % CURVE_ORDER).to_bytes(32, "big"))

    def _squeeze(self):
        h = hashlib.sha256(bytes(self.state)).digest()
        self.state.extend(h)
        return int.from_bytes(h, "big")

    def challenge(self):
        """하위 CHALLENGE_LENGTH_IN_BITS 비트만 남긴 prechallenge."""
        return FR(self._squeeze() & ((1 << CHALLENGE_LENGTH_IN_BITS) - 1))

    def digest(self):
        """FR로 축소한 전체 폭 챌린지."""
        return FR(self._squeeze() % CURVE_ORDER)


class ScalarChallenge:
    """엔도모피즘 폴딩 전의 prechallenge.

    속성:
        prechallenge: 스펀지에서 짜낸 FR 원소 (하위 128비트가 의미를 가짐)
    """

    def __init__(self, prechallenge):
        if not isinstance(prechallenge, FR):
            prechallenge = FR(prechallenge)
        self.prechallenge = prechallenge

    def to_field(self, endo_r, length_in_bits=CHALLENGE_LENGTH_IN_BITS):
        """prechallenge를 FR 원소 a·endo_r + b 로 접는다.

        a = b = 2 에서 시작하여, i = length/2 - 1 부터 0까지
          a, b ← 2a, 2b
          s = +1 (비트 2i가 1) / -1 (0)
          비트 2i+1이 1이면 a += s, 아니면 b += s
        """
        bits = int(self.prechallenge)
        a = FR(2)
        b = FR(2)
        one = FR(1)
        neg_one = FR(CURVE_ORDER - 1)
        for i in reversed(range(length_in_bits // 2)):
            a = a + a
            b = b + b
            s = one if (bits >> (2 * i)) & 1 else neg_one
            if (bits >> (2 * i + 1)) & 1:
                a = a + s
            else:
                b = b + s
        return a * endo_r + b

    def __eq__(self, other):
        if not isinstance(other, ScalarChallenge):
            return NotImplemented
        return self.prechallenge == other.prechallenge

    def __repr__(self):
        return f"ScalarChallenge({int(self.prechallenge):#x})"


def squeeze_prechallenge(sponge):
    """스펀지에서 접히지 않은 prechallenge 하나를 짜낸다."""
    return ScalarChallenge(sponge.challenge())


def squeeze_challenge(endo_r, sponge):
    """prechallenge를 짜낸 뒤 endo_r로 접어 FR 챌린지를 만든다."""
    chal = squeeze_prechallenge(sponge).to_field(endo_r)
    logger.debug("squeezed challenge %#x", int(chal))
    return chal


def absorb_commitment(sponge, commitment):
    """커밋먼트의 모든 청크를 청크 순서대로 흡수한다."""
    sponge.absorb_g(commitment.elems)
