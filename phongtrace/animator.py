"""
Helpers for rendering animation sequences.

An Animator yields one Frame per image. Each Frame knows its position in
the sequence, builds zero-padded output filenames, and provides a
LinearScale for interpolating scene parameters over time.

Example (one full turn of a camera over 60 frames):

    for frame in Animator(60):
        angle = frame.linear_scale().with_breakpoints([0, 2 * math.pi]).scale(frame.current)
        ...
        canvas.save(frame.filename('out', 'orbit', '.png'))
"""

from __future__ import annotations
import math
import os
from typing import Callable, Iterator, Sequence, Tuple


class LinearScale:
    """Piecewise-linear mapping from a domain onto a list of breakpoints.

    The domain is divided into len(breakpoints) - 1 equal slices; within a
    slice the output moves linearly between neighbouring breakpoints. Inputs
    outside the domain are clamped to it.
    """

    def __init__(
        self,
        domain: Tuple[float, float] = (0.0, 1.0),
        breakpoints: Sequence[float] = (0.0, 1.0)
    ):
        if domain[0] == domain[1]:
            raise ValueError(f"Domain must not be empty, got {domain}")
        if len(breakpoints) < 2:
            raise ValueError(f"Need at least 2 breakpoints, got {len(breakpoints)}")
        self.domain = (float(domain[0]), float(domain[1]))
        self.breakpoints = tuple(float(b) for b in breakpoints)

    def with_breakpoints(self, breakpoints: Sequence[float]) -> LinearScale:
        """Return a scale over the same domain with new breakpoints."""
        return LinearScale(self.domain, breakpoints)

    def scale(self, value: float) -> float:
        lo, hi = self.domain
        clamped = min(max(value, min(lo, hi)), max(lo, hi))
        fraction = (clamped - lo) / (hi - lo)

        num_slices = len(self.breakpoints) - 1
        position = fraction * num_slices
        # the top of the domain belongs to the last slice
        index = min(int(math.floor(position)), num_slices - 1)
        slice_fraction = position - index

        start = self.breakpoints[index]
        end = self.breakpoints[index + 1]
        return start + slice_fraction * (end - start)


class Frame:
    """One frame of an animation."""

    def __init__(self, current: int, count: int):
        self.current = current
        self.count = count

    @property
    def progress(self) -> float:
        """Fraction of the sequence before this frame, in [0, 1)."""
        return self.current / self.count

    def filename(self, path: str, name: str, ext: str) -> str:
        """Build an output filename like `path/name000042.png`."""
        return f"{path}{os.sep}{name}{self.current:06d}{ext}"

    def linear_scale(self) -> LinearScale:
        """A scale whose domain spans the whole animation."""
        return LinearScale(domain=(0.0, float(self.count)))

    def __repr__(self) -> str:
        return f"Frame({self.current}/{self.count})"


class Animator:
    """Produces the frames of an animation in order."""

    def __init__(self, frame_count: int):
        if frame_count <= 0:
            raise ValueError(f"frame_count must be positive, got {frame_count}")
        self.frame_count = frame_count

    def __iter__(self) -> Iterator[Frame]:
        for current in range(self.frame_count):
            yield Frame(current, self.frame_count)

    def __len__(self) -> int:
        return self.frame_count

    def animate(self, callback: Callable[[Frame], None]) -> None:
        """Call `callback` once per frame, in order."""
        for frame in self:
            callback(frame)
