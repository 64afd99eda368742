import pytest

from conftest import listing_page
from extupdate.domain.errors import (
    MetadataExtractionError,
    MetadataNodeNotFound,
    MetadataParseError,
)
from extupdate.services.marketplace.page import (
    extract_display_name,
    extract_metadata,
    select_text,
)


def test_extracts_metadata_from_captured_page(fixture_text):
    document = extract_metadata(fixture_text("listing_page.html"))
    assert document["ItemName"] == "redhat.java"
    assert [v["version"] for v in document["Versions"]] == ["1.36.0", "1.35.1", "1.35.0"]


def test_node_outside_container_is_not_matched(fixture_text):
    with pytest.raises(MetadataNodeNotFound):
        extract_metadata(fixture_text("listing_page_no_metadata.html"))


def test_display_name_is_trimmed(fixture_text):
    assert extract_display_name(fixture_text("listing_page.html")) == "Language Support for Java(TM) by Red Hat"


def test_display_name_absent():
    assert extract_display_name(listing_page({"Versions": []}, display_name=None)) is None


def test_missing_node_on_unrelated_page():
    with pytest.raises(MetadataNodeNotFound) as exc:
        extract_metadata("<html><body><p>Service unavailable</p></body></html>")
    assert exc.value.stage == "extract"


def test_invalid_json_is_a_parse_error():
    with pytest.raises(MetadataParseError):
        extract_metadata(listing_page('{"Versions": [}'))


def test_non_object_json_is_a_parse_error():
    with pytest.raises(MetadataParseError):
        extract_metadata(listing_page("[1, 2, 3]"))


def test_empty_node_is_a_parse_error():
    with pytest.raises(MetadataParseError):
        extract_metadata(listing_page(""))


def test_layout_and_parse_failures_are_distinct():
    assert not issubclass(MetadataNodeNotFound, MetadataParseError)
    assert not issubclass(MetadataParseError, MetadataNodeNotFound)
    assert issubclass(MetadataNodeNotFound, MetadataExtractionError)
    assert issubclass(MetadataParseError, MetadataExtractionError)


def test_first_matching_node_wins():
    page = (
        '<div class="rhs-content">'
        '<div class="jiContent">{"Versions": [{"version": "2.0.0"}]}</div>'
        '<div class="jiContent">{"Versions": [{"version": "1.0.0"}]}</div>'
        "</div>"
    )
    assert extract_metadata(page)["Versions"][0]["version"] == "2.0.0"


def test_entities_in_element_text_are_decoded():
    page = '<div class="rhs-content"><div class="jiContent">{&quot;Versions&quot;: []}</div></div>'
    assert extract_metadata(page) == {"Versions": []}


def test_match_requires_ancestor_not_sibling():
    page = '<div class="rhs-content"></div><div class="jiContent">{}</div>'
    assert select_text(page, ("rhs-content", "jiContent")) is None


def test_element_with_multiple_classes_matches():
    page = '<section class="rhs-content wide"><span class="x jiContent y">{"a": 1}</span></section>'
    assert extract_metadata(page) == {"a": 1}


def test_text_of_nested_children_is_collected():
    page = '<div class="outer"><div class="title">Hello <b>there</b></div><div class="title">No</div></div>'
    assert select_text(page, ("outer", "title")) == "Hello there"


def test_unclosed_void_elements_do_not_break_nesting():
    page = (
        '<div class="rhs-content"><br><img src="x.png"><input type="hidden">'
        '<script class="jiContent">{"Versions": [{"version": "0.1.0"}]}</script>'
        "</div>"
    )
    assert extract_metadata(page)["Versions"][0]["version"] == "0.1.0"


def test_deeply_nested_json_is_a_parse_error():
    nested = '{"Versions": ' + "[" * 100000 + "]" * 100000 + "}"
    with pytest.raises(MetadataParseError):
        extract_metadata(listing_page(nested))
