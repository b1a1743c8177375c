"""Unit tests for keyword extraction and match scoring."""

import pytest

from careerhub.services.keywords import KEYWORD_VOCABULARY, extract_keywords, match_score


# ===== TESTS: extract_keywords =====

class TestExtractKeywords:

    def test_role_title(self):
        assert extract_keywords("Senior Software Engineer") >= {"senior", "engineer"}

    def test_lowercases_and_strips_punctuation(self):
        assert extract_keywords("PYTHON/Django, AWS!") == {"python", "django", "aws"}

    def test_drops_short_tokens(self):
        # "hr" is in the vocabulary but only two characters long
        assert "hr" in KEYWORD_VOCABULARY
        assert extract_keywords("HR and IT") == set()

    def test_role_suffix_is_substring_match(self):
        keywords = extract_keywords("engineers and co-managers wanted")
        assert "engineers" in keywords
        assert "managers" in keywords

    def test_unknown_words_are_ignored(self):
        assert extract_keywords("banana bicycle umbrella") == set()

    def test_multi_word_vocabulary_never_matches(self):
        assert extract_keywords("real estate") == set()

    @pytest.mark.parametrize("text", ["", None, "   "])
    def test_empty_input(self, text):
        assert extract_keywords(text) == set()

    def test_punctuation_splits_tokens(self):
        assert extract_keywords("node.js") == {"node"}


# ===== TESTS: match_score =====

class TestMatchScore:

    def test_identical_sets_score_one(self):
        keywords = {"python", "django", "senior"}
        assert match_score(keywords, keywords) == 1.0

    def test_empty_side_scores_zero(self):
        assert match_score(set(), {"python"}) == 0
        assert match_score({"python"}, set()) == 0

    def test_ratio_uses_larger_set(self):
        assert match_score({"python", "django"}, {"python", "django", "aws", "docker"}) == 0.5

    def test_symmetric(self):
        a = {"python", "sql", "aws"}
        b = {"python", "java"}
        assert match_score(a, b) == match_score(b, a)

    def test_reducing_overlap_never_increases_score(self):
        target = {"python", "django", "aws", "docker"}
        full = {"python", "django", "aws", "docker"}
        partial = {"python", "django", "java", "php"}
        assert match_score(partial, target) <= match_score(full, target)
