from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .dataset import Dataset, Number

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Step between ticks for [start, stop] aiming at `count` ticks.

    Positive results are the step itself; negative results -k mean a step of 1/k,
    which keeps fractional steps exact.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def _tick_spec(start: float, stop: float, count: int) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: int) -> List[float]:
    """Evenly spaced round values within [start, stop], roughly `count` of them."""
    if count <= 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []
    if inc < 0:
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


@dataclass(frozen=True)
class BandScale:
    """
    Categorical scale giving each domain entry its own equal-width band.

    Entries are addressed by position, so repeated titles each get their own
    band. Padding is applied both between bands and at the outer edges.
    """

    domain: Tuple[str, ...]
    range: Tuple[float, float]
    padding: float = 0.1

    @property
    def step(self) -> float:
        n = len(self.domain)
        r0, r1 = self.range
        return (r1 - r0) / max(1.0, n - self.padding + self.padding * 2)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    @property
    def _start(self) -> float:
        n = len(self.domain)
        r0, r1 = self.range
        # centred: whatever is left after the bands is split between both ends
        return r0 + (r1 - r0 - self.step * (n - self.padding)) * 0.5

    def at(self, index: int) -> float:
        """Left edge of the band at `index`."""
        if not 0 <= index < len(self.domain):
            raise IndexError(f"Band index {index} out of range")
        return self._start + self.step * index

    def center(self, index: int) -> float:
        return self.at(index) + self.bandwidth / 2

    def __call__(self, category: str) -> Optional[float]:
        """Left edge of the first band labelled `category`, None if absent."""
        try:
            return self.at(self.domain.index(category))
        except ValueError:
            return None


@dataclass(frozen=True)
class LinearScale:
    """Continuous numeric scale from `domain` to `range` (range may be inverted)."""

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: Number) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            # A degenerate domain carries no magnitude; everything sits on the baseline.
            return float(r0)
        t = (value - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def nice(self, count: int = 10) -> LinearScale:
        """Extend the domain outward to round tick boundaries."""
        start, stop = self.domain
        if start == stop:
            return self
        reverse = stop < start
        if reverse:
            start, stop = stop, start

        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step

        domain = (stop, start) if reverse else (start, stop)
        return LinearScale(domain=(float(domain[0]) + 0.0, float(domain[1]) + 0.0), range=self.range)

    def ticks(self, count: int = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int = 10):
        """Formatter matching the tick step: integers for whole steps, fixed decimals otherwise."""
        d0, d1 = self.domain
        if d0 == d1:
            decimals = 0
        else:
            inc = tick_increment(min(d0, d1), max(d0, d1), count)
            # a negative increment -k is a step of 1/k
            decimals = 0 if inc > 0 else math.ceil(math.log10(-inc))

        def fmt(value: float) -> str:
            return f"{value:,.{decimals}f}"

        return fmt


@dataclass(frozen=True)
class Scales:
    x: BandScale
    y: LinearScale


def build_scales(
        dataset: Dataset,
        metric: str,
        plot_width: float,
        plot_height: float,
        padding: float = 0.1,
        tick_count: int = 10,
) -> Scales:
    """
    Build the x (band) and y (linear) scales for one chart.

    x: one band per record, in dataset order, over [0, plot_width].
    y: [0, max(metric)] niced, mapped to [plot_height, 0] so larger values sit higher.
       Records missing the metric do not contribute to the max; an empty dataset
       gives a [0, 0] domain.
    """
    x = BandScale(domain=tuple(dataset.titles()), range=(0.0, float(plot_width)), padding=padding)
    y_max = dataset.max_metric(metric)
    y = LinearScale(domain=(0.0, float(y_max)), range=(float(plot_height), 0.0)).nice(tick_count)
    return Scales(x=x, y=y)
