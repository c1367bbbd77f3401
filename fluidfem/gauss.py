"""Tabulated quadrature rules on the line, tetrahedron and triangle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

Point = Union[float, Tuple[float, ...]]


@dataclass(frozen=True)
class QuadratureRule:
    """Integration points with their weights."""

    points: Tuple[Point, ...]
    weights: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.weights)

    def __iter__(self) -> Iterator[Tuple[Point, float]]:
        return iter(zip(self.points, self.weights))


def _mirrored(negative: Tuple[float, ...], middle: Tuple[float, ...] = ()) -> Tuple[float, ...]:
    return negative + middle + tuple(-p for p in reversed(negative))


def _symmetric(half: Tuple[float, ...], middle: Tuple[float, ...] = ()) -> Tuple[float, ...]:
    return half + middle + tuple(reversed(half))


_LINE_31 = QuadratureRule(
    points=_mirrored(
        (
            -0.9970874818194770,
            -0.9846859096651525,
            -0.9625039250929497,
            -0.9307569978966481,
            -0.8897600299482711,
            -0.8399203201462674,
            -0.781733148416624,
            -0.7157767845868532,
            -0.6427067229242603,
            -0.5632491614071493,
            -0.4781937820449025,
            -0.3883859016082329,
            -0.2947180699817016,
            -0.1981211993355706,
            -0.0995553121523415,
        ),
        (0.0,),
    ),
    weights=_symmetric(
        (
            0.0074708315792488,
            0.0173186207903106,
            0.0270090191849794,
            0.0364322739123855,
            0.0454937075272011,
            0.0541030824249169,
            0.0621747865610284,
            0.0696285832354104,
            0.0763903865987766,
            0.0823929917615893,
            0.0875767406084779,
            0.0918901138936415,
            0.0952902429123195,
            0.0977433353863287,
            0.0992250112266723,
        ),
        (0.0997205447934265,),
    ),
)

_LINE_RULES = {
    2: QuadratureRule(
        points=(-0.577350296189626, 0.577350296189626),
        weights=(1.0, 1.0),
    ),
    3: QuadratureRule(
        points=(-0.774596669241483, 0.0, 0.774596669241483),
        weights=(0.555555555555555, 0.888888888888888, 0.555555555555555),
    ),
    4: QuadratureRule(
        points=(-0.861135311594053, -0.339981043584856, 0.339981043584856, 0.861135311594053),
        weights=(0.347854845137454, 0.652145154862546, 0.652145154862546, 0.347854845137454),
    ),
}

# Orders 5, 6, 7, 20 and 30 share the table entry that ends in the 31-point rule.
for _order in (5, 6, 7, 20, 30, 31):
    _LINE_RULES[_order] = _LINE_31


def gauss_line(num: int) -> QuadratureRule:
    """Return the Gauss-Legendre rule on [-1, 1] registered under ``num``."""
    try:
        return _LINE_RULES[num]
    except KeyError:
        raise ValueError(f"undefined order {num} is set in the gauss integral") from None


def gauss_tetra(num: int) -> QuadratureRule:
    """Return a tetrahedron rule; points are natural coordinates (L0, L1, L2, L3)."""
    if num == 1:
        return QuadratureRule(points=((0.25, 0.25, 0.25, 0.25),), weights=(1.0,))
    if num == 2:
        a = 0.13819660
        b = 1.0 - 2.0 * a
        return QuadratureRule(
            points=((b, a, a, a), (a, b, a, a), (a, a, b, a), (a, a, a, b)),
            weights=(0.25, 0.25, 0.25, 0.25),
        )
    if num == 3:
        s = 1.0 / 6.0
        return QuadratureRule(
            points=(
                (0.25, 0.25, 0.25, 0.25),
                (0.5, s, s, s),
                (s, 0.5, s, s),
                (s, s, 0.5, s),
                (s, s, s, 0.5),
            ),
            weights=(-0.8, 9.0 / 20.0, 9.0 / 20.0, 9.0 / 20.0, 9.0 / 20.0),
        )
    raise ValueError(f"undefined order {num} is set in the gauss integral")


def gauss_triangle(num: int) -> QuadratureRule:
    """Return a triangle rule; points are area coordinates (L1, L2, L3)."""
    third = 1.0 / 3.0
    if num == 1:
        return QuadratureRule(points=((third, third, third),), weights=(1.0,))
    if num == 2:
        return QuadratureRule(
            points=((0.0, 0.5, 0.5), (0.5, 0.0, 0.5), (0.5, 0.5, 0.0)),
            weights=(third, third, third),
        )
    if num == 3:
        big, small = 11.0 / 15.0, 2.0 / 15.0
        return QuadratureRule(
            points=(
                (third, third, third),
                (big, small, small),
                (small, big, small),
                (small, small, small),
            ),
            weights=(-27.0 / 48.0, 25.0 / 48.0, 25.0 / 48.0, 25.0 / 48.0),
        )
    raise ValueError(f"undefined order {num} is set in the gauss integral")