"""
Example 01: Movie Recommendations from Genres.

Builds a tiny object/tag graph by hand and asks for movies related to
"Star Wars" and to "The Raid".
"""

from pixiewalk import Recommender, Object


def main():
    recommender = Recommender(seed=42)

    # 1. Register movies and genres
    # ---------------------------------------------------------
    for movie in ("Star Wars", "007", "The Raid", "Rocky", "Monty Python and The Holy Grail"):
        recommender.add_object(movie)
    for genre in ("Action", "Sci-fi", "Drama", "Comedy"):
        recommender.add_tag(genre)

    # 2. Assign genres
    # ---------------------------------------------------------
    recommender.tag_object("Star Wars", "Sci-fi")
    recommender.tag_object("Star Wars", "Action")
    recommender.tag_object("007", "Action")
    recommender.tag_object("The Raid", "Action")
    recommender.tag_object("Rocky", "Action")
    recommender.tag_object("Rocky", "Drama")
    recommender.tag_object("Monty Python and The Holy Grail", "Comedy")

    print(f"Recommender: {recommender!r}")

    # 3. Mixed tag/object results
    # ---------------------------------------------------------
    print("\n--- Related to 'Star Wars' (tags and objects) ---")
    print(recommender.simple_recommendations(Object("Star Wars"), 20))

    # 4. Objects only, with a bias towards Drama
    # ---------------------------------------------------------
    print("\n--- Movies like 'The Raid', Drama weighted x5 ---")
    recs = recommender.object_recommendations(
        ["The Raid"],
        depth=10,
        max_total_steps=500,
        object_to_tag_weight=lambda movie, genre: 5.0 if genre == "Drama" else 1.0,
        tag_to_object_weight=lambda genre, movie: 1.0,
    )
    print(recs)


if __name__ == "__main__":
    main()
