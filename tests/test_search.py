import pytest

from mobile_lookup.errors import SearchValidationFailure
from mobile_lookup.services.search import parse_query, search_records
from mobile_lookup.services.utils import phones_match


def test_parse_query_splits_and_filters():
    text = "98765-43210\n+91 87654 32109;123, 7654321098\n\n"
    assert parse_query(text) == ["9876543210", "918765432109", "7654321098"]


def test_short_tokens_do_not_count():
    assert parse_query("123") == []
    assert parse_query("") == []


def test_phones_match_both_directions():
    assert phones_match("9876543210", "9876543210")
    assert phones_match("9876543210", "919876543210")
    assert phones_match("919876543210", "9876543210")
    assert not phones_match("9876543211", "919876543210")
    assert phones_match("9876543210", "")


def test_scenario_one_found_one_missing(dataset):
    results, stats = search_records(dataset, "9876543210\n1112223333")
    assert [r["id"] for r in results] == [1]
    assert stats.total == 2
    assert stats.found == 1
    assert stats.not_found == 1
    assert stats.model_dump(by_alias=True) == {"total": 2, "found": 1, "notFound": 1}


def test_matches_are_deduplicated_but_each_token_counts(dataset):
    results, stats = search_records(dataset, "9876543210, 919876543210")
    assert [r["id"] for r in results] == [1]
    assert (stats.total, stats.found, stats.not_found) == (2, 2, 0)


def test_results_keep_first_occurrence_order(dataset):
    results, _ = search_records(dataset, "8765432109;9876543210")
    assert [r["id"] for r in results] == [2, 1]


def test_record_with_country_code_matches_local_number():
    dataset = [{"id": 1, "mobile": "919876543210", "name": "", "status": ""}]
    results, stats = search_records(dataset, "9876543210")
    assert len(results) == 1
    assert stats.found == 1


def test_record_without_mobile_matches_every_token(dataset):
    dataset = dataset + [{"id": 3, "mobile": "", "name": "No phone", "status": ""}]
    results, stats = search_records(dataset, "1112223333")
    assert [r["id"] for r in results] == [3]
    assert stats.found == 1


def test_search_is_repeatable(dataset):
    assert search_records(dataset, "9876543210") == search_records(dataset, "9876543210")


@pytest.mark.parametrize("query", ["", "   ", "123, 456"])
def test_no_valid_numbers(dataset, query):
    with pytest.raises(SearchValidationFailure, match="valid mobile numbers"):
        search_records(dataset, query)


def test_search_needs_a_dataset():
    with pytest.raises(SearchValidationFailure, match="upload"):
        search_records([], "9876543210")


def test_non_ascii_digits_do_not_make_a_token():
    fullwidth = "９８７６５４３２１０"
    arabic_indic = "٩٨٧٦٥٤٣٢١٠"
    assert parse_query(f"{fullwidth}\n{arabic_indic}") == []
    assert parse_query(f"{fullwidth}98765 43210") == ["9876543210"]


def test_non_ascii_only_query_is_rejected(dataset):
    with pytest.raises(SearchValidationFailure):
        search_records(dataset, "９８７６５４３２１０")
