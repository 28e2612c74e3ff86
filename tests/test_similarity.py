from datetime import date

import pytest

from hme_blog.models import Article
from hme_blog.similarity import (
    build_vector,
    cosine_similarity,
    rank,
    rank_related,
    tokenize,
)


def make_article(slug: str, title: str = "", excerpt=None, **overrides) -> Article:
    data = {
        "id": f"id-{slug}",
        "slug": slug,
        "title": title,
        "date": "2024-01-15",
        "excerpt": excerpt,
        "coverImage": {"url": f"https://example.com/{slug}.jpg"},
    }
    data.update(overrides)
    return Article(**data)


def test_tokenize_lowercases_and_splits_on_punctuation():
    assert tokenize("Robot-Kontes, ITB 2024!") == ["robot", "kontes", "itb", "2024"]


def test_tokenize_empty_and_whitespace_only():
    assert tokenize("") == []
    assert tokenize("   \n\t ") == []
    assert tokenize(None) == []


def test_tokenize_is_ascii_only():
    # Known limitation: non-Latin text yields no tokens, accented letters split words.
    assert tokenize("ロボット コンテスト") == []
    assert tokenize("Café") == ["caf"]


def test_build_vector_counts_duplicates():
    vector = build_vector(["robot", "lomba", "robot"])
    assert vector == {"robot": 2, "lomba": 1}
    assert build_vector([]) == {}


def test_similarity_is_symmetric():
    a = "Robot Kontes ITB lomba robot tahunan"
    b = "Resep kue robot"
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_similarity_with_itself_is_one():
    text = "lomba robot lomba robot tahunan"
    assert cosine_similarity(text, text) == pytest.approx(1.0)


def test_similarity_with_empty_text_is_zero():
    assert cosine_similarity("robot", "") == 0.0
    assert cosine_similarity("", "robot") == 0.0
    assert cosine_similarity("!!! ---", "robot") == 0.0


def test_similarity_known_value():
    score = cosine_similarity(
        "Robot Kontes ITB lomba robot tahunan", "Robot Kontes ITB 2024 lomba robot"
    )
    assert score == pytest.approx(7 / 8)


def test_similarity_disjoint_texts_is_zero():
    assert cosine_similarity("robot kontes", "resep kue") == 0.0


def test_rank_excludes_self_and_orders_by_score():
    current = make_article("a", "Robot Kontes ITB", "lomba robot tahunan")
    candidates = [
        make_article("a", "Robot Kontes ITB", "lomba robot tahunan"),
        make_article("b", "Robot Kontes ITB 2024", "lomba robot"),
        make_article("c", "Resep Kue", "cara membuat kue"),
    ]

    ranked = rank_related(current, candidates)

    assert [item.slug for item in ranked] == ["b", "c"]
    assert ranked[0].score == pytest.approx(0.875)
    assert ranked[1].score == 0.0
    assert ranked[0].score > ranked[1].score


def test_rank_preserves_candidate_fields():
    current = make_article("a", "Robot Kontes")
    candidate = make_article("b", "Robot Kontes 2024", "lomba", content={"value": {}})

    (scored,) = rank_related(current, [candidate])

    assert scored.id == candidate.id
    assert scored.title == candidate.title
    assert scored.date == date(2024, 1, 15)
    assert scored.cover_image == candidate.cover_image
    assert scored.content == candidate.content
    assert not hasattr(candidate, "score")


def test_rank_empty_candidates_returns_empty_list():
    current = make_article("a", "Robot Kontes ITB")
    assert rank_related(current, []) == []


def test_rank_only_self_returns_empty_list():
    current = make_article("a", "Robot Kontes ITB")
    assert rank_related(current, [current]) == []


def test_rank_all_empty_texts_keeps_input_order():
    current = make_article("a", "Robot Kontes ITB", "lomba robot")
    candidates = [make_article(slug) for slug in ("e", "d", "c", "b")]

    ranked = rank_related(current, candidates)

    assert [item.slug for item in ranked] == ["e", "d", "c"]
    assert all(item.score == 0.0 for item in ranked)


def test_rank_ties_keep_input_order():
    current = make_article("a", "robot kontes")
    candidates = [
        make_article("x", "robot"),
        make_article("y", "kontes"),
        make_article("z", "robot kontes"),
    ]

    ranked = rank_related(current, candidates)

    assert [item.slug for item in ranked] == ["z", "x", "y"]
    assert ranked[1].score == ranked[2].score


def test_rank_returns_top_three_of_five():
    current = make_article("cur", "alpha beta gamma delta")
    candidates = [
        make_article("fourth", "alpha"),
        make_article("first", "alpha beta gamma delta"),
        make_article("fifth", "zeta"),
        make_article("third", "alpha beta"),
        make_article("second", "alpha beta gamma"),
    ]

    ranked = rank_related(current, candidates)

    assert [item.slug for item in ranked] == ["first", "second", "third"]
    scores = [item.score for item in ranked]
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == pytest.approx(1.0)


def test_rank_never_exceeds_eligible_count_or_limit():
    current = make_article("a", "robot")
    candidates = [make_article("a", "robot"), make_article("b", "robot lomba")]

    assert len(rank_related(current, candidates)) == 1
    many = [make_article(f"s{i}", "robot") for i in range(10)]
    assert len(rank_related(current, many)) == 3
    assert len(rank_related(current, many, limit=5)) == 5
    assert rank_related(current, many, limit=0) == []


def test_rank_handles_missing_excerpt():
    current = make_article("a", "robot kontes", None)
    candidates = [make_article("b", "robot", 42), make_article("c", "kue")]

    ranked = rank_related(current, candidates)

    assert [item.slug for item in ranked] == ["b", "c"]
    assert ranked[0].excerpt == ""


def test_rank_alias_matches_rank_related():
    assert rank is rank_related


def test_similarity_counts_use_ascii_tokenizer():
    # Counts come from `tokenize`, not the vectorizer's default word pattern.
    assert cosine_similarity("ROBOT, robot!", "robot") == pytest.approx(1.0)
    assert cosine_similarity("Café", "caf") == pytest.approx(1.0)
    assert cosine_similarity("a b", "a") == pytest.approx(1 / 2 ** 0.5)
