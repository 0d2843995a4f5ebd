"""
Search Options - Validates keyword search parameters against JSON schema
"""

import copy
import json
from collections.abc import Sequence
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any, Tuple, List, Optional

import structlog
import yaml
from jsonschema import Draft7Validator

logger = structlog.get_logger(__name__)

SCHEMA_PATH = Path(__file__).parent / 'schema' / 'options.schema.json'


class ConfigurationError(Exception):
    """Raised when keyword search parameters are missing, mistyped or unknown"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Invalid keyword search parameters: {'; '.join(errors)}")


@dataclass(frozen=True)
class SearchOptions:
    """Resolved options for a single clause build"""
    every_column: bool = False
    every_word: bool = False
    whole_word: bool = False
    operator: str = '~'
    interp: bool = False

    @property
    def column_joiner(self) -> str:
        """Glue between comparisons inside a keyword group"""
        return ' AND ' if self.every_column else ' OR '

    @property
    def word_joiner(self) -> str:
        """Glue between keyword groups"""
        return '\n AND \n' if self.every_word else '\n OR \n'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class OptionsValidator:
    """Validates keyword search parameters against the options schema"""

    def __init__(self, schema_path: Optional[str] = None):
        """
        Initialize validator with schema

        Args:
            schema_path: Path to options JSON schema file (defaults to the bundled schema)
        """
        self.schema_path = Path(schema_path) if schema_path else SCHEMA_PATH
        self.schema = self._load_schema()
        self.validator = Draft7Validator(self.schema)

        # Stored profiles carry options only; keywords and columns come from the caller
        profile_schema = copy.deepcopy(self.schema)
        profile_schema['required'] = []
        self.profile_validator = Draft7Validator(profile_schema)

    def _load_schema(self) -> Dict[str, Any]:
        """Load JSON schema from file"""
        try:
            with open(self.schema_path, 'r') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError([f"Failed to load options schema: {e}"])

    def validate_params(self, params: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate call parameters

        Args:
            params: Keyword arguments passed to the clause builder

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = self._collect_errors(self.validator, params)
        return (len(errors) == 0, errors)

    def validate_profile(self, profile: Any) -> Tuple[bool, List[str]]:
        """
        Validate a stored search profile

        Args:
            profile: Mapping loaded from a profile file

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = self._collect_errors(self.profile_validator, profile)
        if isinstance(profile, dict) and 'keywords' in profile:
            errors.append("Search profile must not define 'keywords'")
        return (len(errors) == 0, errors)

    def resolve(self, params: Dict[str, Any]) -> Tuple[str, List[str], SearchOptions]:
        """
        Validate parameters and split them into keywords, columns and options

        Args:
            params: Keyword arguments passed to the clause builder

        Returns:
            Tuple of (keywords, columns, options)

        Raises:
            ConfigurationError: If any parameter is missing, mistyped or unknown
        """
        params = normalize_params(params)

        is_valid, errors = self.validate_params(params)
        if not is_valid:
            logger.warning("keyword_search_rejected", errors=errors)
            raise ConfigurationError(errors)

        options = SearchOptions(**{
            name: value for name, value in params.items()
            if name not in ('keywords', 'columns')
        })
        return params['keywords'], list(params['columns']), options

    def _collect_errors(self, validator: Draft7Validator, instance: Any) -> List[str]:
        errors = []

        for error in sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path]):
            # Include the path to the error
            path = '.'.join(str(p) for p in error.absolute_path) if error.absolute_path else 'root'
            errors.append(f"Schema validation error at {path}: {error.message}")

        return errors


def is_column_sequence(value: Any) -> bool:
    """Sequences other than text, which would otherwise split into characters"""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def normalize_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Accept any sequence for columns; JSON schema only knows lists as arrays"""
    if is_column_sequence(params.get('columns')) and not isinstance(params['columns'], list):
        params = dict(params, columns=list(params['columns']))
    return params


_default_validator: Optional[OptionsValidator] = None


def get_options_validator() -> OptionsValidator:
    """Get the shared validator for the bundled schema"""
    global _default_validator
    if _default_validator is None:
        _default_validator = OptionsValidator()
    return _default_validator


def load_search_profile(profile_path: str) -> Dict[str, Any]:
    """
    Load stored search options from a YAML/JSON file and validate them

    Args:
        profile_path: Path to profile file

    Returns:
        Validated options mapping, ready to pass as keyword arguments

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid options
    """
    profile_path = str(profile_path)

    try:
        with open(profile_path, 'r') as f:
            if profile_path.endswith('.yaml') or profile_path.endswith('.yml'):
                profile = yaml.safe_load(f)
            else:
                profile = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError([f"Failed to load search profile {profile_path}: {e}"])

    if profile is None:
        profile = {}

    profile = normalize_params(profile) if isinstance(profile, dict) else profile

    is_valid, errors = get_options_validator().validate_profile(profile)
    if not is_valid:
        raise ConfigurationError(errors)

    logger.info("search_profile_loaded", path=profile_path, options=sorted(profile))
    return profile
