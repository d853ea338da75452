from datetime import timedelta

import pytest

from docvault.core.exceptions import ValidationError
from docvault.knowledge.retrieval.search import SearchService, highlight, matched_keywords
from conftest import BASE_TIME, InMemoryMetadataStore


@pytest.fixture
def store():
    store = InMemoryMetadataStore()
    store.add("Annual Report", filename="AnnualReport.pdf", uploaded_at=BASE_TIME)
    store.add("Health Survey", filename="HealthSurvey.pdf", uploaded_at=BASE_TIME + timedelta(hours=1))
    store.add("quarterly_REPort", filename="quarterly_REPort.docx", uploaded_at=BASE_TIME + timedelta(hours=2))
    return store


@pytest.mark.asyncio
async def test_substring_match_newest_first(store):
    results = await SearchService(store).search("rep")

    assert [result.title for result in results] == ["quarterly_REPort", "Annual Report"]


@pytest.mark.asyncio
async def test_result_fields(store):
    results = await SearchService(store).search("annual")
    [result] = results

    assert result.id == "doc-1"
    assert result.filename == "AnnualReport.pdf"
    assert result.classification == "Uncategorized"
    assert result.upload_date == BASE_TIME
    assert result.preview == "Annual Report - AnnualReport.pdf"
    assert result.highlighted_preview == "<mark>Annual</mark> Report - <mark>Annual</mark>Report.pdf"
    assert result.matched_keywords == ["annual"]


@pytest.mark.asyncio
async def test_matched_keywords_are_whole_query_terms(store):
    [by_term] = await SearchService(store).search("annual rep")
    [by_word] = await SearchService(store).search("Annual Report")

    assert by_term.matched_keywords == ["annual", "rep"]
    assert "rep" not in by_word.matched_keywords
    assert by_word.matched_keywords == ["annual", "report"]


@pytest.mark.asyncio
async def test_whole_query_must_match_title(store):
    assert await SearchService(store).search("survey annual") == []


@pytest.mark.asyncio
async def test_two_characters_is_enough(store):
    results = await SearchService(store).search("he")

    assert [result.title for result in results] == ["Health Survey"]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "r"])
async def test_short_query_is_rejected(store, query):
    with pytest.raises(ValidationError, match="Invalid search query"):
        await SearchService(store).search(query)


@pytest.mark.asyncio
async def test_equal_timestamps_keep_store_order():
    store = InMemoryMetadataStore()
    store.add("report-a", uploaded_at=BASE_TIME)
    store.add("report-b", uploaded_at=BASE_TIME)

    results = await SearchService(store).search("report")

    assert [result.title for result in results] == ["report-a", "report-b"]


def test_highlight_is_case_insensitive_and_preserves_case():
    assert highlight("Annual REPORT - report.pdf", ["report"]) == (
        "Annual <mark>REPORT</mark> - <mark>report</mark>.pdf"
    )


def test_first_listed_term_wins_on_overlap():
    assert highlight("Report", ["rep", "report"]) == "<mark>Rep</mark>ort"
    assert highlight("Report", ["report", "rep"]) == "<mark>Report</mark>"


def test_adjacent_matches_are_not_merged():
    assert highlight("abcd", ["ab", "cd"]) == "<mark>ab</mark><mark>cd</mark>"


def test_terms_are_literal_text():
    assert highlight("v1.2 vs v132", ["1.2"]) == "v<mark>1.2</mark> vs v132"


def test_matched_keywords_checks_title_and_filename():
    assert matched_keywords("Budget budget_2024.xlsx", ["2024", "xlsx", "tax"]) == ["2024", "xlsx"]
