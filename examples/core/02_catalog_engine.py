"""
Example 02: Catalog-Scale Engine.

Loads a synthetic power-law catalog through DuckDB and ranks related objects
and tags as Arrow tables.
"""

import time
from pixiewalk import PixieWalk, generate_tagged_catalog


def main():
    print("Generating catalog...")
    catalog = generate_tagged_catalog(n_objects=5_000, n_tags=100, tags_per_object=3)

    with PixieWalk(seed=7, depth=8, max_total_steps=20_000) as db:
        start = time.time()
        rows = db.load_taggings(catalog)
        print(f"Loaded {rows} taggings in {time.time() - start:.2f}s -> {db.recommender.graph!r}")

        seeds = ["O1", "O2"]
        print(f"\n--- Objects related to {seeds} ---")
        start = time.time()
        print(db.recommend(seeds, n=10).to_pandas())
        print(f"Ranked in {time.time() - start:.2f}s")

        print("\n--- Tags related to T99 ---")
        print(db.recommend(seed_tags=["T99"], kind="tag", n=5).to_pandas())


if __name__ == "__main__":
    main()
