#!/usr/bin/env python3
# Pandigital_Prime_Sieve.py

"""
This program finds the greatest pandigital prime, the largest integer that for
some n uses each of the digits 1 through n exactly once and is also prime.

It works with a segmented prime sieve. A base sieve of Eratosthenes is built
once for all integers up to sqrt(MAX). The candidate space is then cut into
windows by digit count and leading digit, for example the 7-digit numbers
starting with 7 are the window 7,000,000 .. 7,999,999. Each window is sieved
on its own using the primes of the base sieve, so only one window is held in
memory at a time. Window boundaries are computed with exact integer powers of
ten, never floating point, so no window can be off by one.

Windows are visited from the greatest downward: digit counts 9 to 2, and for
each digit count the leading digit from n down to 1 (a pandigital number with
n digits cannot start with a digit greater than n). Within a window the primes
are screened for pandigitality all at once and the greatest hit is taken. The
first window with a hit therefore holds the answer, and the search stops there.

Every pandigital number with 8 or 9 digits has a digit sum of 36 or 45, so it
is divisible by 3 and cannot be prime. The plain search still sieves those
windows. The --skip-div3 option drops every digit count whose digit sum is a
multiple of 3, which reaches the same answer without that work.

The result is cross-checked with sympy before it is printed.

Run as: python Pandigital_Prime_Sieve.py [--max N] [--digits D] [--skip-div3]
                                         [--report FILE] [-v]
or omit the parameters to take the defaults.
"""

import argparse
import json
import math
import sys
import time

import numpy as np
from sympy import isprime

# Default parameters:
MAX = 1_000_000_000  # Ceiling for every window upper bound
MAX_DIGITS = 9       # Pandigital numbers never have more than nine digits
MIN_DIGITS = 2       # One digit pandigitals are trivial


def make_base_sieve(limit):
    """
    Classic sieve of Eratosthenes.

    Returns a numpy boolean array of length limit+1 where sieve[i] is True
    iff i is prime.
    """
    if limit < 0:
        raise ValueError(f"Base sieve limit must not be negative, got {limit}")
    sieve = np.ones(limit + 1, dtype=bool)
    sieve[:2] = False
    i = 2
    while i * i <= limit:
        if sieve[i]:
            sieve[i * i::i] = False
        i += 1
    return sieve


def base_primes(base_sieve):
    """Return the primes marked in base_sieve as an ascending integer array."""
    return np.flatnonzero(base_sieve)


def make_range_sieve(lo, hi, base_sieve):
    """
    Sieve the closed window [lo, hi] with the primes of base_sieve.

    The returned boolean array is offset addressed: sieve[j - lo] is True iff
    j is prime. Every composite in the window needs a prime factor no greater
    than sqrt(hi), so hi has to stay below len(base_sieve)**2.

    Args:
        lo: First integer of the window, at least 2
        hi: Last integer of the window
        base_sieve: Boolean array from make_base_sieve

    Returns:
        numpy boolean array of length hi - lo + 1
    """
    if lo < 2:
        raise ValueError(f"Range sieve must start at 2 or above, got {lo:,}")
    if hi < lo:
        raise ValueError(f"Empty range sieve window {lo:,} .. {hi:,}")
    if hi >= len(base_sieve) ** 2:
        raise ValueError(f"Window end {hi:,} is not covered by a base sieve "
                         f"of {len(base_sieve):,} entries")

    sieve = np.ones(hi - lo + 1, dtype=bool)
    primes = base_primes(base_sieve)
    for p in primes[primes * primes <= hi].tolist():
        # First multiple of p in the window, but never p itself
        start = max(p * p, -(-lo // p) * p)
        sieve[start - lo::p] = False
    return sieve


def is_n_pandigital(number, n):
    """True if number has exactly n digits and contains each of 1..n once."""
    if not 1 <= n <= 9:
        raise ValueError(f"Pandigital digit count must be 1..9, got {n}")
    digits = str(number)
    if len(digits) != n:
        return False
    return all(str(d) in digits for d in range(1, n + 1))


def pandigital_mask(values, n):
    """
    Vectorised is_n_pandigital over a numpy integer array.

    Each value has to lie in [10**(n-1), 10**n) and its digits, collected as
    a bitmask, have to be exactly {1, ..., n}. With n digits and n distinct
    required digits there is no room for a repeat or a zero.
    """
    if not 1 <= n <= 9:
        raise ValueError(f"Pandigital digit count must be 1..9, got {n}")
    values = np.asarray(values, dtype=np.int64)
    in_range = (values >= 10 ** (n - 1)) & (values < 10 ** n)
    seen = np.zeros(values.shape, dtype=np.int64)
    rest = values.copy()
    for _ in range(n):
        seen |= np.left_shift(1, rest % 10)
        rest //= 10
    return in_range & (seen == (1 << (n + 1)) - 2)


def bucket_bounds(num_digits, lead):
    """Return (lo, hi) of the num_digits-digit numbers whose first digit is lead."""
    scale = 10 ** (num_digits - 1)
    return lead * scale, (lead + 1) * scale - 1


def candidate_ranges(max_digits=MAX_DIGITS, min_digits=MIN_DIGITS):
    """
    Generator of (num_digits, lead, lo, hi) windows, greatest window first.
    """
    for num_digits in range(max_digits, min_digits - 1, -1):
        for lead in range(num_digits, 0, -1):
            lo, hi = bucket_bounds(num_digits, lead)
            yield num_digits, lead, lo, hi


def digit_sum_divisible_by_3(num_digits):
    """Every num_digits pandigital has digit sum 1+2+...+n; True if 3 divides it."""
    return (num_digits * (num_digits + 1) // 2) % 3 == 0


class SearchReport:
    """
    Record of one search: the windows that were sieved and what they held.

    Exported as JSON with export(). Each window entry has the keys
    num_digits, lead, lo, hi, primes, pandigital_primes and seconds.
    """

    def __init__(self):
        self.metadata = {
            'max_value': 0,
            'max_digits': 0,
            'base_sieve_limit': 0,
            'base_prime_count': 0,
            'skip_div3': False,
            'skipped_digit_counts': [],
            'result': None,
            'seconds': 0.0,
        }
        self.windows = []

    def add_window(self, num_digits, lead, lo, hi, prime_count, hit_count, seconds):
        self.windows.append({
            'num_digits': num_digits,
            'lead': lead,
            'lo': lo,
            'hi': hi,
            'primes': prime_count,
            'pandigital_primes': hit_count,
            'seconds': round(seconds, 6),
        })

    def as_dict(self):
        return dict(self.metadata, windows=list(self.windows))

    def export(self, path):
        """Write the report to path as JSON."""
        with open(path, 'w') as f:
            json.dump(self.as_dict(), f, indent=2)
        return path


def find_greatest_pandigital_prime(max_value=MAX, max_digits=MAX_DIGITS,
                                   skip_div3=False, verbose=False, report=None):
    """
    Search the digit windows from the top down for the first pandigital prime.

    Args:
        max_value: Ceiling for window upper bounds, sets the base sieve size
        max_digits: Greatest digit count to try (2..9)
        skip_div3: Skip digit counts whose pandigitals are all divisible by 3
        verbose: Print a line per window
        report: Optional SearchReport to fill in

    Returns:
        The greatest pandigital prime found, or None if there is none
    """
    if not MIN_DIGITS <= max_digits <= MAX_DIGITS:
        raise ValueError(f"Digit count must be {MIN_DIGITS}..{MAX_DIGITS}, got {max_digits}")
    _, top = bucket_bounds(max_digits, max_digits)
    if top >= max_value:
        raise ValueError(f"Maximum {max_value:,} does not cover the "
                         f"{max_digits}-digit windows (need more than {top:,})")

    start_time = time.perf_counter()
    base_limit = math.isqrt(max_value)
    base_sieve = make_base_sieve(base_limit)
    if verbose:
        print(f"Base sieve up to {base_limit:,} holds {int(base_sieve.sum()):,} primes")
    if report is not None:
        report.metadata.update(max_value=max_value, max_digits=max_digits,
                               base_sieve_limit=base_limit,
                               base_prime_count=int(base_sieve.sum()),
                               skip_div3=skip_div3)

    result = None
    result_digits = 0
    for num_digits, lead, lo, hi in candidate_ranges(max_digits):
        if skip_div3 and digit_sum_divisible_by_3(num_digits):
            if lead == num_digits:
                if verbose:
                    print(f"  Skipping {num_digits}-digit pandigitals, all divisible by 3")
                if report is not None:
                    report.metadata['skipped_digit_counts'].append(num_digits)
            continue

        window_start = time.perf_counter()
        if verbose:
            print(f"  Sieving {num_digits}-digit window {lo:,} .. {hi:,}")
        sieve = make_range_sieve(lo, hi, base_sieve)
        primes = np.flatnonzero(sieve) + lo
        del sieve
        hits = primes[pandigital_mask(primes, num_digits)]
        elapsed = time.perf_counter() - window_start

        if verbose:
            print(f"    {len(primes):,} primes, {len(hits):,} pandigital, {elapsed:.3f} seconds")
        if report is not None:
            report.add_window(num_digits, lead, lo, hi, len(primes), len(hits), elapsed)

        if len(hits):
            # Primes come out ascending, so the last hit is the greatest
            result = int(hits[-1])
            result_digits = num_digits
            break

    if result is not None:
        # Verify result by SYMPY
        if not isprime(result) or not is_n_pandigital(result, result_digits):
            sys.exit(f"ERROR -- {result:,} is not a {result_digits}-digit pandigital prime")

    total = time.perf_counter() - start_time
    if verbose:
        print(f"Search finished in {total:.3f} seconds")
    if report is not None:
        report.metadata['result'] = result
        report.metadata['seconds'] = round(total, 6)
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Find the greatest pandigital prime with a segmented sieve',
        epilog='Windows are sieved one at a time, greatest first.'
    )
    parser.add_argument('--max', type=int, default=MAX,
                        help=f'Ceiling for window upper bounds (default: {MAX:,})')
    parser.add_argument('--digits', type=int, default=MAX_DIGITS,
                        help=f'Greatest digit count to search (default: {MAX_DIGITS})')
    parser.add_argument('--skip-div3', action='store_true',
                        help='Skip digit counts whose pandigitals are all divisible by 3')
    parser.add_argument('--report', metavar='FILE',
                        help='Write a JSON report of the sieved windows to FILE')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print progress for every window')
    args = parser.parse_args(argv)

    if args.verbose:
        print("=" * 70)
        print("Greatest Pandigital Prime Search")
        print("=" * 70)
        print(f"Maximum: {args.max:,}")
        print(f"Digits: {args.digits} down to {MIN_DIGITS}")
        print()

    report = SearchReport() if args.report else None
    try:
        result = find_greatest_pandigital_prime(args.max, args.digits, args.skip_div3,
                                                args.verbose, report)
    except ValueError as e:
        parser.error(str(e))

    if args.verbose:
        print()
    if result is None:
        print(f"No pandigital prime found with up to {args.digits} digits.")
    else:
        print(f"The greatest pandigital prime is {result}")

    if report is not None:
        report.export(args.report)
        if args.verbose:
            print(f"Report written to {args.report}")


if __name__ == "__main__":
    main()
