"""
Rule generation and the lookup chain for the Two Bits module.

Every unit builds two tables when it is activated:

    code_to_query   00-99 -> two letter query. Shuffled from a fixed seed, so
                    every unit in the world agrees. This is the grid printed
                    in the manual.
    query_to_code   two letter query -> 00-99. Shuffled from a per-unit seed
                    and only discoverable by querying the unit.

The solution is found by walking code -> query -> code a fixed number of
times starting from the unit's initial code.
"""

import random
from types import MappingProxyType

from utilities.labels import BUTTON_LABELS

# Shared by every unit. Changing this invalidates every printed manual.
GRID_SEED = 0

DEFAULT_ITERATIONS = 3

CODE_COUNT = len(BUTTON_LABELS) ** 2


def all_queries():
    """Every two-letter query, in code order (00 -> 'bb', 99 -> 'zz')."""
    return [
        BUTTON_LABELS[i // len(BUTTON_LABELS)] + BUTTON_LABELS[i % len(BUTTON_LABELS)]
        for i in range(CODE_COUNT)
    ]


def new_instance_seed():
    """Draw a per-unit seed from the process-wide random source."""
    return random.randrange(0, 2**31 - 1)


def evaluate_chain(initial_code, code_to_query, query_to_code, iterations=DEFAULT_ITERATIONS):
    """
    Walk the lookup chain and return the final query string.

    The walk runs ``iterations + 1`` times. The value returned is the last
    query looked up, not the code it maps to.
    """
    code = initial_code
    query = ""
    for _ in range(iterations + 1):
        query = code_to_query[code]
        code = query_to_code[query]
    return query


def trace_chain(initial_code, code_to_query, query_to_code, iterations=DEFAULT_ITERATIONS):
    """Same walk as evaluate_chain, returning every (query, response) pair."""
    steps = []
    code = initial_code
    for _ in range(iterations + 1):
        query = code_to_query[code]
        code = query_to_code[query]
        steps.append((query, code))
    return steps


def render_grid(code_to_query):
    """Render the published lookup grid as plain text, one row per tens digit."""
    width = len(BUTTON_LABELS)
    lines = ["    " + " ".join(f"-{col}" for col in range(width))]
    for row in range(width):
        cells = " ".join(code_to_query[row * width + col] for col in range(width))
        lines.append(f"{row}-  {cells}")
    return "\n".join(lines)


class RuleSet:
    """
    The pair of lookup tables owned by one unit.

    Both tables are total bijections between the codes 0-99 and the 100
    two-letter queries. They are read-only once built.
    """

    def __init__(self, seed=None, grid_seed=GRID_SEED):
        self.seed = new_instance_seed() if seed is None else seed
        self.grid_seed = grid_seed

        codes = list(range(CODE_COUNT))
        queries = all_queries()

        # Shared grid, recomputed per unit rather than cached
        random.Random(grid_seed).shuffle(codes)
        code_to_query = {}
        for i in range(CODE_COUNT):
            code_to_query[codes[i]] = queries[i]

        # Per-unit responses
        random.Random(self.seed).shuffle(queries)
        query_to_code = {}
        for i in range(CODE_COUNT):
            query_to_code[queries[i]] = codes[i]

        self.code_to_query = MappingProxyType(code_to_query)
        self.query_to_code = MappingProxyType(query_to_code)

    def lookup(self, query):
        """Response for a query, or None if it isn't a known query."""
        return self.query_to_code.get(query)

    def evaluate(self, initial_code, iterations=DEFAULT_ITERATIONS):
        return evaluate_chain(initial_code, self.code_to_query, self.query_to_code, iterations)

    def trace(self, initial_code, iterations=DEFAULT_ITERATIONS):
        return trace_chain(initial_code, self.code_to_query, self.query_to_code, iterations)

    def grid(self):
        return render_grid(self.code_to_query)
