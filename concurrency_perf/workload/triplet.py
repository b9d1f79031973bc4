# Copyright 2025 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import logging
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Triplet = Tuple[float, float, float]

CONVERGENCE_TOLERANCE = 1e-14


def random_triplet(rng: Optional[np.random.Generator] = None) -> Triplet:
    rng = rng if rng is not None else np.random.default_rng()
    a, b, c = rng.random(3)
    return (float(a), float(b), float(c))


def next_triplet(triplet: Triplet) -> Triplet:
    applicant = triplet[0] + triplet[1] - triplet[2]
    if abs(applicant) <= 1.0:
        return (triplet[1], triplet[2], applicant)
    return (triplet[1], triplet[2], 1.0 / applicant)


def is_convergent(triplet: Triplet, following: Triplet) -> bool:
    return all(abs(x - y) < CONVERGENCE_TOLERANCE for x, y in zip(triplet, following))


def iterate(initial: Triplet, n_cycles: int) -> float:
    """Runs the triplet recurrence for n_cycles steps and returns the last member"""
    triplet = initial
    converged = False
    for step in range(n_cycles):
        following = next_triplet(triplet)
        if not converged and is_convergent(triplet, following):
            logger.debug(
                f"The sequence has converged: {initial[0]:f}, {initial[1]:f}, and {initial[2]:f} "
                f"give {triplet[2]:f} since step {step}."
            )
            converged = True
        triplet = following
    return triplet[2]


def run_cycles(n_cycles: int) -> float:
    return iterate(random_triplet(), n_cycles)


class TripletWorkload:
    """
    Fixed-cost CPU-bound unit of work: n_cycles steps of the triplet recurrence
    seeded from fresh random input on every call.

    Instances are plain picklable callables so they can be shipped to worker
    processes.
    """

    def __init__(self, n_cycles: int) -> None:
        if n_cycles < 1:
            raise ValueError(f"n_cycles must be positive, got {n_cycles}")
        self.n_cycles = n_cycles

    def __call__(self) -> float:
        return run_cycles(self.n_cycles)

    def __repr__(self) -> str:
        return f"TripletWorkload(n_cycles={self.n_cycles})"
