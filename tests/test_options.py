"""
Test Suite for Search Options

Tests schema validation, option resolution and search profile loading.
"""

import json
from dataclasses import FrozenInstanceError

import pytest

from keyword_search import (
    SearchOptions,
    OptionsValidator,
    ConfigurationError,
    KeywordClauseBuilder,
    load_search_profile,
)


@pytest.fixture
def validator():
    """Options validator with the bundled schema"""
    return OptionsValidator()


class TestSearchOptions:
    """Test resolved option defaults"""

    def test_defaults(self):
        """Test documented defaults"""
        options = SearchOptions()

        assert options.every_column is False
        assert options.every_word is False
        assert options.whole_word is False
        assert options.operator == '~'
        assert options.interp is False

    def test_joiners(self):
        """Test joiners follow the AND/OR flags"""
        assert SearchOptions().column_joiner == ' OR '
        assert SearchOptions().word_joiner == '\n OR \n'
        assert SearchOptions(every_column=True).column_joiner == ' AND '
        assert SearchOptions(every_word=True).word_joiner == '\n AND \n'

    def test_immutable(self):
        """Test options cannot change after construction"""
        options = SearchOptions()
        with pytest.raises(FrozenInstanceError):
            options.operator = 'REGEXP'


class TestOptionsValidator:
    """Test parameter validation"""

    def test_valid_params(self, validator):
        """Test minimal valid parameters"""
        is_valid, errors = validator.validate_params({'keywords': 'cat', 'columns': ['pets']})

        assert is_valid is True
        assert errors == []

    def test_error_paths(self, validator):
        """Test errors name the offending parameter"""
        is_valid, errors = validator.validate_params({'keywords': 'cat', 'columns': ['pets', 1]})

        assert is_valid is False
        assert errors[0].startswith('Schema validation error at columns.1:')

    def test_root_errors(self, validator):
        """Test missing and unknown names are reported at root"""
        is_valid, errors = validator.validate_params({'columns': [], 'colour': 'red'})

        assert is_valid is False
        assert len(errors) == 2
        assert all(e.startswith('Schema validation error at root:') for e in errors)

    def test_resolve(self, validator):
        """Test resolve splits params into keywords, columns and options"""
        keywords, columns, options = validator.resolve({
            'keywords': 'cat',
            'columns': ('pets',),
            'operator': 'REGEXP',
        })

        assert keywords == 'cat'
        assert columns == ['pets']
        assert options == SearchOptions(operator='REGEXP')

    def test_resolve_raises(self, validator):
        """Test resolve raises with all errors attached"""
        with pytest.raises(ConfigurationError) as exc_info:
            validator.resolve({'keywords': 'cat'})

        assert exc_info.value.errors == ["Schema validation error at root: 'columns' is a required property"]
        assert str(exc_info.value).startswith('Invalid keyword search parameters: ')

    def test_missing_schema_file(self, tmp_path):
        """Test unreadable schema is a configuration error"""
        with pytest.raises(ConfigurationError):
            OptionsValidator(str(tmp_path / 'missing.schema.json'))

    def test_custom_schema(self, tmp_path):
        """Test builder honours a custom schema"""
        schema = {
            'type': 'object',
            'required': ['keywords', 'columns'],
            'properties': {'operator': {'enum': ['~', '~*']}},
        }
        schema_path = tmp_path / 'options.schema.json'
        schema_path.write_text(json.dumps(schema))

        builder = KeywordClauseBuilder(OptionsValidator(str(schema_path)))

        with pytest.raises(ConfigurationError):
            builder.build('cat', ['pets'], operator='LIKE')
        assert '~*' in builder.build('cat', ['pets'], operator='~*').sql


class TestSearchProfiles:
    """Test loading stored options from YAML/JSON"""

    def test_load_yaml(self, tmp_path):
        """Test YAML profile loads and feeds the builder"""
        profile_path = tmp_path / 'articles.yaml'
        profile_path.write_text(
            "columns:\n"
            "  - title\n"
            "  - summary\n"
            "whole_word: true\n"
            "operator: REGEXP\n"
        )

        profile = load_search_profile(str(profile_path))

        assert profile == {'columns': ['title', 'summary'], 'whole_word': True, 'operator': 'REGEXP'}

        sql, values = KeywordClauseBuilder().build_from_params(dict(profile, keywords='cat'))
        assert 'lower(summary) REGEXP lower(?)' in sql
        assert values == ['(^|[[:<:]])cat([[:>:]]|$)'] * 2

    def test_load_json(self, tmp_path):
        """Test JSON profile loads"""
        profile_path = tmp_path / 'articles.json'
        profile_path.write_text(json.dumps({'every_word': True}))

        assert load_search_profile(profile_path) == {'every_word': True}

    def test_empty_yaml(self, tmp_path):
        """Test empty profile means all defaults"""
        profile_path = tmp_path / 'empty.yml'
        profile_path.write_text('')

        assert load_search_profile(str(profile_path)) == {}

    def test_keywords_not_allowed(self, tmp_path):
        """Test profiles can't carry search text"""
        profile_path = tmp_path / 'bad.yaml'
        profile_path.write_text("keywords: cat\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_search_profile(str(profile_path))

        assert "must not define 'keywords'" in str(exc_info.value)

    def test_unknown_option(self, tmp_path):
        """Test profile typos are rejected"""
        profile_path = tmp_path / 'typo.yaml'
        profile_path.write_text("wholeword: true\n")

        with pytest.raises(ConfigurationError):
            load_search_profile(str(profile_path))

    def test_not_a_mapping(self, tmp_path):
        """Test profile must be a mapping"""
        profile_path = tmp_path / 'list.yaml'
        profile_path.write_text("- title\n- summary\n")

        with pytest.raises(ConfigurationError):
            load_search_profile(str(profile_path))

    def test_malformed_yaml(self, tmp_path):
        """Test parse errors become configuration errors"""
        profile_path = tmp_path / 'broken.yaml'
        profile_path.write_text("columns: [title\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_search_profile(str(profile_path))

        assert 'Failed to load search profile' in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        """Test missing profile file"""
        with pytest.raises(ConfigurationError):
            load_search_profile(str(tmp_path / 'nope.yaml'))
