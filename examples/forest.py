"""Example: Trees sharing flyweight tree types.

Plants a number of trees of two types at random positions and shows that
only two TreeType objects are ever created, however many trees there are.
"""

import argparse
import random

from patternkit import LockedCache, MemoryCache
from patternkit.flyweights import Forest, render_text


def main():
    parser = argparse.ArgumentParser(description="Demonstrate flyweight sharing")
    parser.add_argument(
        "--trees",
        type=int,
        default=10,
        help="Number of trees to plant (default: 10)",
    )
    parser.add_argument(
        "--canvas",
        type=int,
        default=500,
        help="Canvas size for random positions (default: 500)",
    )
    parser.add_argument(
        "--cache",
        type=str,
        choices=["memory", "locked"],
        default="memory",
        help="Cache type: memory (single-threaded) or locked (thread-safe) (default: memory)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible positions",
    )
    parser.add_argument(
        "--text",
        type=str,
        default="HELLO FLYWEIGHT",
        help="Text to render with shared glyphs (default: HELLO FLYWEIGHT)",
    )
    args = parser.parse_args()

    rng = random.Random(args.seed)
    cache = LockedCache() if args.cache == "locked" else MemoryCache()
    forest = Forest(cache=cache)

    kinds = [("Summer Oak", "green"), ("Autumn Oak", "orange")]
    for i in range(args.trees):
        name, color = kinds[i % len(kinds)]
        forest.plant_tree(
            rng.randrange(args.canvas), rng.randrange(args.canvas), name, color
        )

    for line in forest.draw():
        print(line)

    print()
    print(f"Trees planted: {len(forest.trees)}")
    print(f"Tree types created: {forest.cache.stats.creates}")
    print(f"Tree types cached: {forest.tree_types}")

    print()
    for line in render_text(args.text):
        print(line)


if __name__ == "__main__":
    main()
