"""
Benchmark of the inversion counters
===================================

Times :func:`~inversion_count.count_divide_and_conquer` and :func:`~inversion_count.count_natural`
on two kinds of input: uniformly random integers, and "presorted" integers, where the random
array has been sorted in consecutive chunks of a fixed length. The latter consists of a known
number of runs, which the natural merge sort can take advantage of.

From the command line::

    python -m inversion_count --length 100000 --iterations 5

API
---

.. autoclass:: inversion_count.benchmark.BenchmarkConfig
    :members:

.. autoclass:: inversion_count.benchmark.BenchmarkResult
    :members:

.. autofunction:: inversion_count.benchmark.run_benchmark

Author, Copyright and License
-----------------------------

Copyright © 2025 Hauke Dämpfling (haukex@zero-g.net)

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED “AS IS” AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
"""
import logging
import random
import statistics
import time
from collections.abc import Callable, Sequence
from concurrent.futures.thread import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

import click

from . import count_divide_and_conquer, count_natural

ARRAY_LENGTH = 1_000_000
MINIMUM_VALUE = -100_000
MAXIMUM_VALUE = +100_000
RUN_LENGTH_IN_PRESORTED_ARRAY = 2000
WARMUP_ITERATIONS = 5
MEASUREMENT_ITERATIONS = 10

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BenchmarkConfig:
    """Settings for :func:`run_benchmark`. The defaults run the full-size benchmark."""
    array_length :int = ARRAY_LENGTH
    minimum_value :int = MINIMUM_VALUE
    maximum_value :int = MAXIMUM_VALUE
    #: Length of the sorted chunks of the presorted input
    run_length :int = RUN_LENGTH_IN_PRESORTED_ARRAY
    warmup_iterations :int = WARMUP_ITERATIONS
    measurement_iterations :int = MEASUREMENT_ITERATIONS
    #: Seed for the input generator, ``None`` for a different input on every run
    seed :Optional[int] = None
    #: Number of trials to run concurrently
    workers :int = 1

    def validate(self) -> None:
        """:raises ValueError: If any of the settings is out of range."""
        if self.array_length < 1:
            raise ValueError(f"array length must be positive, not {self.array_length}")
        if self.minimum_value > self.maximum_value:
            raise ValueError(f"empty value range [{self.minimum_value}, {self.maximum_value}]")
        if self.run_length < 1:
            raise ValueError(f"run length must be positive, not {self.run_length}")
        if self.warmup_iterations < 0:
            raise ValueError(f"warm-up iterations may not be negative, not {self.warmup_iterations}")
        if self.measurement_iterations < 1:
            raise ValueError(f"measurement iterations must be positive, not {self.measurement_iterations}")
        if self.workers < 1:
            raise ValueError(f"need at least one worker, not {self.workers}")

def create_random_array(length :int, minimum :int, maximum :int, rng :random.Random) -> list[int]:
    """Uniformly distributed integers from the inclusive range ``[minimum, maximum]``."""
    return [ rng.randint(minimum, maximum) for _ in range(length) ]

def create_presorted_array(length :int, minimum :int, maximum :int, run_length :int, rng :random.Random) -> list[int]:
    """A random array (see :func:`create_random_array`) in which each consecutive chunk of
    ``run_length`` items is sorted, but the chunks are not sorted relative to each other."""
    array = create_random_array(length, minimum, maximum, rng)
    for i in range(0, length, run_length):
        array[i:i+run_length] = sorted(array[i:i+run_length])
    return array

Counter = Callable[[list[int]], int]

#: The counters that can be benchmarked, by name.
COUNTERS :dict[str, Counter] = {
    'mergesort': count_divide_and_conquer,
    'natural-mergesort': count_natural,
}

#: The kinds of input that can be benchmarked, by name.
INPUTS :dict[str, Callable[[BenchmarkConfig, random.Random], list[int]]] = {
    'random': lambda cfg, rng: create_random_array(
        cfg.array_length, cfg.minimum_value, cfg.maximum_value, rng),
    'presorted': lambda cfg, rng: create_presorted_array(
        cfg.array_length, cfg.minimum_value, cfg.maximum_value, cfg.run_length, rng),
}

@dataclass
class BenchmarkResult:
    """The measurements of one counter on one kind of input."""
    counter :str
    input :str
    #: The number of inversions the counter reported
    inversions :int
    #: Duration of each measured iteration in milliseconds
    timings_ms :list[float] = field(default_factory=list)

    @property
    def mean_ms(self) -> float:
        return statistics.fmean(self.timings_ms)

    @property
    def stdev_ms(self) -> float:
        return statistics.stdev(self.timings_ms) if len(self.timings_ms)>1 else 0.0

    @property
    def min_ms(self) -> float:
        return min(self.timings_ms)

# Runs one counter on fresh copies of the same array; the counters sort their input,
# so reusing one copy would time every iteration after the first on sorted data.
def _run_trial(counter_name :str, input_name :str, array :Sequence[int], config :BenchmarkConfig) -> BenchmarkResult:
    counter = COUNTERS[counter_name]
    logger.info("%s on %s input: %d warm-up, %d measured iterations", counter_name, input_name,
        config.warmup_iterations, config.measurement_iterations)
    for _ in range(config.warmup_iterations):
        counter(list(array))
    result :Optional[BenchmarkResult] = None
    for i in range(config.measurement_iterations):
        work = list(array)
        start = time.perf_counter()
        inversions = counter(work)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s on %s input, iteration %d: %.3f ms", counter_name, input_name, i+1, elapsed)
        if result is None:
            result = BenchmarkResult(counter_name, input_name, inversions)
        result.timings_ms.append(elapsed)
    assert result is not None
    return result

def run_benchmark(config :BenchmarkConfig, counters :Optional[Sequence[str]] = None,
                  inputs :Optional[Sequence[str]] = None) -> list[BenchmarkResult]:
    """Runs one trial of each counter on each kind of input.

    One array is generated per kind of input and shared by all counters, so their reported
    inversion counts must agree.

    :param config: The benchmark settings.
    :param counters: Names from :data:`COUNTERS`, default all.
    :param inputs: Names from :data:`INPUTS`, default all.
    :return: One result per counter and input, in input-major order.
    :raises ValueError: If the settings are invalid or a name is unknown.
    :raises RuntimeError: If two counters report different inversion counts for one input.
    """
    config.validate()
    counters = list(counters or COUNTERS)
    inputs = list(inputs or INPUTS)
    for name in counters:
        if name not in COUNTERS:
            raise ValueError(f"unknown counter {name!r}")
    for name in inputs:
        if name not in INPUTS:
            raise ValueError(f"unknown input {name!r}")

    rng = random.Random(config.seed)
    arrays = { name: INPUTS[name](config, rng) for name in inputs }
    logger.info("generated %d input arrays of %d items", len(arrays), config.array_length)

    trials = [ (c, i) for i in inputs for c in counters ]
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = [ executor.submit(_run_trial, c, i, arrays[i], config) for c, i in trials ]
        results = [ f.result() for f in futures ]

    for name in inputs:
        found = { r.counter: r.inversions for r in results if r.input == name }
        if len(set(found.values()))>1:
            raise RuntimeError(f"counters disagree on {name} input: {found!r}")
    return results

def format_results(results :Sequence[BenchmarkResult]) -> str:
    """Formats benchmark results as a table with times in milliseconds."""
    header = f"{'Benchmark':<32} {'Inversions':>16} {'Mean':>12} {'Stdev':>10} {'Min':>12}"
    lines = [header, '-'*len(header)]
    for r in results:
        lines.append(f"{r.counter+' / '+r.input:<32} {r.inversions:>16} "
                     f"{r.mean_ms:>9.3f} ms {r.stdev_ms:>10.3f} {r.min_ms:>9.3f} ms")
    return '\n'.join(lines)

def setup_logging(verbose :bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

@click.command()
@click.option('-n', '--length', type=click.INT, default=ARRAY_LENGTH, show_default=True, help='Number of items per array')
@click.option('--min', 'minimum', type=click.INT, default=MINIMUM_VALUE, show_default=True, help='Smallest random value')
@click.option('--max', 'maximum', type=click.INT, default=MAXIMUM_VALUE, show_default=True, help='Largest random value')
@click.option('-r', '--run-length', type=click.INT, default=RUN_LENGTH_IN_PRESORTED_ARRAY, show_default=True,
              help='Length of the sorted chunks of the presorted input')
@click.option('-w', '--warmup', type=click.INT, default=WARMUP_ITERATIONS, show_default=True)
@click.option('-i', '--iterations', type=click.INT, default=MEASUREMENT_ITERATIONS, show_default=True)
@click.option('-s', '--seed', type=click.INT, default=None, help='Random seed for reproducible input')
@click.option('-j', '--workers', type=click.INT, default=1, show_default=True, help='Number of trials to run concurrently')
@click.option('-c', '--counter', 'counters', type=click.Choice(list(COUNTERS)), multiple=True, help='Default: all')
@click.option('-t', '--input', 'inputs', type=click.Choice(list(INPUTS)), multiple=True, help='Default: all')
@click.option('-v', '--verbose', is_flag=True, default=False)
def cli(length :int, minimum :int, maximum :int, run_length :int, warmup :int, iterations :int,
        seed :Optional[int], workers :int, counters :tuple[str, ...], inputs :tuple[str, ...], verbose :bool):
    """Benchmark the merge sort and natural merge sort inversion counters."""
    setup_logging(verbose)
    config = BenchmarkConfig(array_length=length, minimum_value=minimum, maximum_value=maximum,
        run_length=run_length, warmup_iterations=warmup, measurement_iterations=iterations,
        seed=seed, workers=workers)
    try:
        config.validate()
    except ValueError as ex:
        raise click.UsageError(str(ex)) from ex
    click.echo(format_results(run_benchmark(config, counters, inputs)))

if __name__ == '__main__':
    cli()  # pylint: disable=no-value-for-parameter
