"""Tests for seoreport.services.extractor.extract."""

from helpers import GOOD_DESCRIPTION, GOOD_TITLE, PAGE_URL, good_page, page, words
from seoreport.services.extractor import count_words, extract
from seoreport.services.parser import parse_document


def _extract(html: str, url: str = PAGE_URL, load_time: int = 0):
    return extract(parse_document(html), url, load_time=load_time)


# ---------------------------------------------------------------------------
# Head metadata
# ---------------------------------------------------------------------------

class TestMetadata:
    def test_good_page_metadata(self):
        signals = _extract(good_page())
        assert signals.title == GOOD_TITLE
        assert signals.description == GOOD_DESCRIPTION
        assert signals.meta_keywords == "widgets, handmade, home"
        assert signals.canonical_url == "https://example.com/page"
        assert signals.robots == "index, follow"

    def test_missing_tags_are_absent(self):
        signals = _extract(page(body="<p>Hello</p>"))
        assert signals.title is None
        assert signals.description is None
        assert signals.meta_keywords is None
        assert signals.canonical_url is None
        assert signals.robots is None

    def test_values_are_trimmed(self):
        html = page(
            head='<title>   Spaced   out   </title><meta name="description" content="  Desc  ">'
        )
        signals = _extract(html)
        assert signals.title == "Spaced   out"
        assert signals.description == "Desc"

    def test_blank_values_are_absent(self):
        html = page(head='<title>   </title><meta name="description" content="   ">')
        signals = _extract(html)
        assert signals.title is None
        assert signals.description is None

    def test_first_matching_tag_wins(self):
        html = page(
            head=(
                '<meta name="description" content="First">'
                '<meta name="description" content="Second">'
            )
        )
        assert _extract(html).description == "First"

    def test_meta_name_is_case_insensitive(self):
        html = page(head='<meta name="Description" content="Upper">')
        assert _extract(html).description == "Upper"

    def test_canonical_with_multiple_rel_values(self):
        html = page(head='<link rel="canonical alternate" href=" https://example.com/c ">')
        assert _extract(html).canonical_url == "https://example.com/c"


class TestSocialTags:
    def test_open_graph_fields(self):
        html = page(
            head=(
                '<meta property="og:title" content="OG title">'
                '<meta property="og:type" content="website">'
            )
        )
        og = _extract(html).open_graph
        assert og.title == "OG title"
        assert og.type == "website"
        assert og.description is None
        assert og.image is None

    def test_twitter_card_by_name(self):
        html = page(head='<meta name="twitter:title" content="Tweet title">')
        card = _extract(html).twitter_card
        assert card.title == "Tweet title"
        assert card.description is None

    def test_twitter_card_falls_back_to_property(self):
        html = page(head='<meta property="twitter:image" content="https://example.com/t.png">')
        assert _extract(html).twitter_card.image == "https://example.com/t.png"


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

class TestHeadings:
    def test_document_order_is_kept(self):
        html = page(body="<h2>Second</h2><h1>One</h1><h2>Third</h2><h3>Deep</h3>")
        signals = _extract(html)
        assert signals.h1_tags == ("One",)
        assert signals.h2_tags == ("Second", "Third")
        assert signals.h3_tags == ("Deep",)

    def test_empty_headings_are_skipped(self):
        html = page(body="<h1>   </h1><h1><span></span></h1><h1>Real</h1>")
        assert _extract(html).h1_tags == ("Real",)

    def test_nested_markup_is_flattened(self):
        html = page(body="<h1>Hello <em>big</em>\n world</h1>")
        assert _extract(html).h1_tags == ("Hello big world",)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

class TestImages:
    def test_relative_src_is_resolved(self):
        html = page(body='<img src="/img/a.png" alt="A">')
        image = _extract(html).images[0]
        assert image.src == "https://example.com/img/a.png"
        assert image.alt == "A"

    def test_missing_alt_becomes_empty_string(self):
        html = page(body='<img src="a.png">')
        assert _extract(html).images[0].alt == ""

    def test_image_without_src_is_skipped(self):
        html = page(body='<img alt="no source"><img src="" alt="empty"><img src="b.png">')
        images = _extract(html).images
        assert len(images) == 1
        assert images[0].src == "https://example.com/b.png"

    def test_unresolvable_src_does_not_stop_extraction(self):
        html = page(body='<img src="a.png"><img src="http://[broken"><img src="c.png">')
        images = _extract(html).images
        assert [image.src for image in images] == [
            "https://example.com/a.png",
            "https://example.com/c.png",
        ]

    def test_five_images_without_alt_are_counted(self):
        html = page(body="".join(f'<img src="/{i}.png" alt="">' for i in range(5)))
        assert _extract(html).images_missing_alt == 5


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestLinks:
    def test_internal_and_external_classification(self):
        html = page(
            body=(
                '<a href="/about">About</a>'
                '<a href="https://example.com/x">Same host</a>'
                '<a href="https://www.example.com/">Subdomain</a>'
                '<a href="https://other.org/">Other</a>'
            )
        )
        links = _extract(html).links
        assert [(link.text, link.type) for link in links] == [
            ("About", "internal"),
            ("Same host", "internal"),
            ("Subdomain", "external"),
            ("Other", "external"),
        ]
        assert links[0].href == "https://example.com/about"

    def test_textless_and_hrefless_anchors_are_skipped(self):
        html = page(
            body='<a href="/empty"></a><a href="/img"><img src="x.png"></a><a>No href</a><a href="/ok">OK</a>'
        )
        links = _extract(html).links
        assert [link.text for link in links] == ["OK"]

    def test_unresolvable_href_is_skipped(self):
        html = page(body='<a href="http://[bad">Bad</a><a href="/good">Good</a>')
        links = _extract(html).links
        assert [link.text for link in links] == ["Good"]

    def test_link_text_whitespace_is_collapsed(self):
        html = page(body='<a href="/x">  Read\n   more </a>')
        assert _extract(html).links[0].text == "Read more"


# ---------------------------------------------------------------------------
# Structured data
# ---------------------------------------------------------------------------

class TestStructuredData:
    def test_blocks_are_parsed(self):
        html = page(
            head='<script type="application/ld+json">{"@type": "Organization"}</script>'
        )
        assert _extract(html).structured_data == ({"@type": "Organization"},)

    def test_invalid_block_is_skipped_but_later_ones_kept(self):
        html = page(
            head=(
                '<script type="application/ld+json">{not json</script>'
                '<script type="application/ld+json">[{"@type": "Product"}]</script>'
            ),
            body="<h1>Still extracted</h1>",
        )
        signals = _extract(html)
        assert signals.structured_data == ([{"@type": "Product"}],)
        assert signals.h1_tags == ("Still extracted",)

    def test_deeply_nested_block_is_skipped(self):
        nested = "[" * 100000 + "]" * 100000
        html = page(
            head=(
                f'<script type="application/ld+json">{nested}</script>'
                '<script type="application/ld+json">{"@type": "Org"}</script>'
            ),
            body="<h1>Kept</h1>",
        )
        signals = _extract(html)
        assert signals.structured_data == ({"@type": "Org"},)
        assert signals.h1_tags == ("Kept",)

    def test_other_script_types_are_ignored(self):
        html = page(head='<script type="text/javascript">var a = {};</script>')
        assert _extract(html).structured_data == ()


# ---------------------------------------------------------------------------
# Word count
# ---------------------------------------------------------------------------

class TestWordCount:
    def test_counts_visible_body_words(self):
        html = page(body=f"<p>{words(120)}</p>")
        assert _extract(html).word_count == 120

    def test_scripts_styles_and_comments_are_not_counted(self):
        html = page(
            body=(
                "<p>one two three</p>"
                "<script>var hidden = 'a b c d';</script>"
                "<style>.x { color: red; }</style>"
                "<!-- a comment with words -->"
                "<noscript>enable javascript please</noscript>"
            )
        )
        assert _extract(html).word_count == 3

    def test_head_text_is_not_counted(self):
        html = page(head="<title>Many words in the title</title>", body="<p>body</p>")
        assert _extract(html).word_count == 1

    def test_empty_body(self):
        assert _extract(page()).word_count == 0

    def test_doctype_is_not_a_word(self):
        html = "<!DOCTYPE html><html><head><title>t</title></head></html>"
        assert _extract(html).word_count == 0

    def test_processing_instruction_is_not_a_word(self):
        html = "<?xml-stylesheet href='a.css'?><!DOCTYPE html><html><body><p>two words</p></body></html>"
        assert _extract(html).word_count == 2

    def test_counting_does_not_modify_document(self):
        soup = parse_document(page(body="<p>a b</p><script>x y</script>"))
        before = str(soup)
        assert count_words(soup) == 2
        assert str(soup) == before


class TestExtractedSignals:
    def test_load_time_is_carried(self):
        assert _extract(page(), load_time=1234).load_time == 1234

    def test_extraction_is_repeatable(self):
        soup = parse_document(good_page())
        assert extract(soup, PAGE_URL) == extract(soup, PAGE_URL)

    def test_json_uses_camel_case(self):
        data = _extract(good_page()).model_dump(by_alias=True)
        for key in ("metaKeywords", "canonicalUrl", "openGraph", "twitterCard", "h1Tags", "wordCount", "loadTime"):
            assert key in data
