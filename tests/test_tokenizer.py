"""Tests for splitting raw log text into mentions."""

from medtimeline.tokenizer import split_mentions


class TestSplitMentions:
    def test_single_mention(self):
        assert split_mentions("Celebrex 200mg") == ["Celebrex 200mg"]

    def test_multiple_mentions_are_trimmed(self):
        assert split_mentions("Percocet 5-325 (1 tablet),  Celebrex 200mg ") == [
            "Percocet 5-325 (1 tablet)",
            "Celebrex 200mg",
        ]

    def test_empty_pieces_dropped(self):
        assert split_mentions("Celebrex 200mg, , ,Xanax 0.25mg,") == ["Celebrex 200mg", "Xanax 0.25mg"]

    def test_none_and_empty(self):
        assert split_mentions(None) == []
        assert split_mentions("") == []
        assert split_mentions("  ,  ") == []

    def test_order_preserved(self):
        assert split_mentions("c, a, b") == ["c", "a", "b"]
