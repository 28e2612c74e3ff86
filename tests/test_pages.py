from datetime import date

from hme_blog.models import Article, ScoredArticle
from hme_blog.pages import format_date_id, render_home, render_not_found, render_post


def _article(slug="robot-kontes", **overrides) -> Article:
    data = {
        "id": "1",
        "slug": slug,
        "title": "Robot Kontes ITB",
        "date": "2024-01-15",
        "excerpt": "lomba robot tahunan",
        "coverImage": {"url": "https://example.com/robot.jpg"},
    }
    data.update(overrides)
    return Article(**data)


def test_format_date_id_uses_indonesian_month_names():
    assert format_date_id(date(2024, 1, 15)) == "15 Januari 2024"
    assert format_date_id(date(2023, 8, 1)) == "1 Agustus 2023"
    assert format_date_id(date(2025, 12, 31)) == "31 Desember 2025"


def test_render_home_lists_cards():
    html = render_home([_article(), _article("resep-kue", id="2", title="Resep Kue & Teh")])
    assert "<h1>Blog HME ITB</h1>" in html
    assert 'href="/blog/robot-kontes"' in html
    assert 'href="/blog/resep-kue"' in html
    assert "Resep Kue &amp; Teh" in html
    assert "15 Januari 2024" in html
    assert "Baca Selengkapnya" in html


def test_render_home_without_cover_image():
    html = render_home([_article(coverImage=None)])
    assert "<img" not in html


def test_render_post_shows_body_and_related():
    post = _article(
        content={
            "value": {
                "schema": "dast",
                "document": {
                    "type": "root",
                    "children": [{"type": "paragraph", "children": [{"type": "span", "value": "Isi"}]}],
                },
            }
        }
    )
    related = [
        ScoredArticle(**_article("robot-2024", id="2", title="Robot 2024").model_dump(), score=0.875)
    ]

    html = render_post(post, related)

    assert "15 Januari 2024" in html
    assert "<p>Isi</p>" in html
    assert "Artikel Terkait" in html
    assert 'href="/blog/robot-2024"' in html
    assert 'data-score="0.8750"' in html
    assert "Kembali ke Home" in html
    assert "Kembali ke Semua Artikel" in html


def test_render_post_without_related_hides_section():
    html = render_post(_article(), [])
    assert "Artikel Terkait" not in html


def test_render_not_found():
    assert "Artikel tidak ditemukan :(" in render_not_found()
