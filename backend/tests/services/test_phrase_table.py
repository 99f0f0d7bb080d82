"""
Tests for PhraseTable
短语表测试
"""

from voxbridge.services.translation import PhraseTable, build_default_phrase_table


class TestPhraseTable:
    def test_keys_normalized(self):
        table = PhraseTable.from_mapping({"en-ar": {"  Good   Morning ": "صباح الخير"}})
        assert table.lookup("good morning", "en", "ar") == "صباح الخير"

    def test_unknown_pair_is_empty(self):
        table = PhraseTable.from_mapping({"en-ar": {"hello": "مرحبا"}})
        assert not table.has_pair("en", "fr")
        assert table.phrases("en", "fr") == {}

    def test_longest_first_keeps_table_order_for_ties(self):
        table = PhraseTable.from_mapping(
            {"en-xx": {"a": "1", "b c": "2", "d e": "3", "f g h": "4"}}
        )
        phrases = [phrase for phrase, _ in table.phrases_longest_first("en", "xx")]
        assert phrases == ["f g h", "b c", "d e", "a"]

    def test_single_word_keys(self):
        table = PhraseTable.from_mapping({"en-ar": {"hello": "مرحبا", "thank you": "شكرا لك"}})
        assert table.single_word_keys("en", "ar") == {"hello"}

    def test_with_reverse_returns_new_table(self):
        table = PhraseTable.from_mapping({"en-ar": {"hello": "مرحبا"}})
        reversed_table = table.with_reverse("en", "ar")

        assert reversed_table.lookup("مرحبا", "ar", "en") == "hello"
        assert not table.has_pair("ar", "en")
        assert len(reversed_table) == 2

    def test_default_table(self):
        table = build_default_phrase_table()

        assert table.has_pair("en", "ar")
        assert table.has_pair("ar", "en")
        assert table.lookup("thank you", "en", "ar") == "شكرا لك"
        assert table.common_words("en", "ar")
