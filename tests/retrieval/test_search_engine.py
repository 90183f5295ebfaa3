"""Unit tests for keyword search."""

import pytest

from sitekb.retrieval.search_engine import score_entry, search_entries, tokenize_query


@pytest.fixture
def invoice_entries(make_entry):
    return [
        make_entry("About", content="We send every invoice with automation."),
        make_entry("Invoice Automation", content="Streamline billing."),
        make_entry("Invoice Portal", content="Customer portal.", tags=["Automation"]),
        make_entry("Automation Suite", content="Workflow tools."),
        make_entry("Invoice tips", content="Try automation today."),
    ]


class TestScoreEntry:
    """Test per-field weighting."""

    def test_field_weights(self, make_entry):
        entry = make_entry("Toner", content="toner refill", tags=["toner-black"])
        assert score_entry(entry, ["toner"]) == 16

    def test_repeated_terms_count_per_occurrence(self, make_entry):
        entry = make_entry("Invoice", content="Nothing here")
        assert score_entry(entry, ["invoice", "invoice"]) == 20

    def test_substring_match_case_insensitive(self, make_entry):
        entry = make_entry("AUTOMATION", content="x")
        assert score_entry(entry, tokenize_query("Auto")) == 10

    def test_tag_counted_once_per_term(self, make_entry):
        entry = make_entry("Other", content="x", tags=["paper", "paperless"])
        assert score_entry(entry, ["paper"]) == 5

    def test_no_match(self, make_entry):
        assert score_entry(make_entry("Toner", content="ink"), ["paper"]) == 0


class TestSearchEntries:
    """Test ranking, limits and empty inputs."""

    def test_ranking_and_limit(self, invoice_entries):
        results = search_entries(invoice_entries, "invoice automation", limit=2)

        assert [entry.title for entry in results] == [
            "Invoice Automation",
            "Invoice Portal",
        ]

    def test_full_ranking(self, invoice_entries):
        results = search_entries(invoice_entries, "invoice automation", limit=10)

        assert [entry.title for entry in results] == [
            "Invoice Automation",
            "Invoice Portal",
            "Invoice tips",
            "Automation Suite",
            "About",
        ]

    def test_ties_keep_store_order(self, make_entry):
        entries = [
            make_entry("Alpha", content="paper"),
            make_entry("Beta", content="no match"),
            make_entry("Gamma", content="paper"),
        ]

        results = search_entries(entries, "paper")
        assert [entry.title for entry in results] == ["Alpha", "Gamma"]

        assert [entry.title for entry in search_entries(entries, "paper", 1)] == ["Alpha"]

    def test_default_limit(self, make_entry):
        entries = [make_entry(f"Paper {i}", content="x") for i in range(8)]
        assert len(search_entries(entries, "paper")) == 5

    def test_non_matching_entries_excluded(self, invoice_entries):
        assert search_entries(invoice_entries, "toner") == []

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_blank_query(self, invoice_entries, query):
        assert search_entries(invoice_entries, query) == []

    def test_empty_store(self):
        assert search_entries([], "invoice") == []

    def test_non_positive_limit(self, invoice_entries):
        assert search_entries(invoice_entries, "invoice", limit=0) == []
