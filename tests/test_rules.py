"""Tests for rule string parsing."""

import pytest

from datarules.errors import RuleDefinitionError
from datarules.rules import normalize_title, parse_rule, parse_rules
from datarules.types import Rule


class TestParseRule:
    def test_full_rule(self):
        rule = parse_rule("firstname,string,required,,1,20")
        assert rule == Rule(
            name="firstname",
            type="string",
            required=True,
            default_value=None,
            params=("1", "20"),
        )

    def test_normalizes_name_and_keyword(self):
        rule = parse_rule(" FirstName , string , REQUIRED")
        assert rule.name == "firstname"
        assert rule.type == "string"
        assert rule.required is True
        assert rule.params == ()

    def test_type_keeps_its_casing(self):
        assert parse_rule("role,authRole,optional").type == "authRole"

    def test_optional_with_default(self):
        rule = parse_rule("active,boolean,optional,true")
        assert rule.required is False
        assert rule.default_value == "true"
        assert rule.has_default

    def test_empty_default_means_none(self):
        rule = parse_rule("age,integer,optional,,0,120")
        assert rule.default_value is None
        assert not rule.has_default

    def test_params_are_kept_verbatim(self):
        rule = parse_rule("email,email,required,,1, 100")
        assert rule.params == ("1", " 100")
        assert rule.param(1) == "100"
        assert rule.param(1, strip=False) == " 100"

    def test_blank_param_is_missing(self):
        rule = parse_rule("code,string,required,,  ,5")
        assert rule.param(0) is None
        assert rule.param(0, strip=False) is None

    def test_blank_regex_pattern_is_rejected(self):
        with pytest.raises(RuleDefinitionError, match="must specify"):
            parse_rule("code,regex,required,,  ")

    def test_param_accessor(self):
        rule = parse_rule("age,integer,required,,,120")
        assert rule.param(0) is None
        assert rule.param(1) == "120"
        assert rule.param(5) is None

    @pytest.mark.parametrize(
        "text,message",
        [
            (",string,required", "Name of property is missing"),
            ("name,,required", "Type of property 'name' is missing"),
            ("name,string,", "Required/optional"),
            ("name,string,sometimes", "must be \"required\" or \"optional\""),
            ("name,string", "at least name, type and required/optional"),
        ],
    )
    def test_malformed_rules(self, text, message):
        with pytest.raises(RuleDefinitionError, match=message):
            parse_rule(text)

    @pytest.mark.parametrize(
        "text",
        [
            "color,enum,required",
            "confirm,compare,required,,",
            "zip,regex,optional,,",
        ],
    )
    def test_types_that_need_a_parameter(self, text):
        with pytest.raises(RuleDefinitionError, match="must specify"):
            parse_rule(text)


class TestParseRules:
    def test_parses_in_order(self):
        rule_set = parse_rules("Signup", ["email,email,required", "age,integer,optional"])
        assert rule_set.title == "signup"
        assert rule_set.field_names == ["email", "age"]
        assert len(rule_set) == 2

    def test_error_prefixed_with_title(self):
        with pytest.raises(RuleDefinitionError, match=r"^\[Signup\] Name of property"):
            parse_rules("Signup", ["email,email,required", ",string,required"])

    def test_empty_rules_rejected(self):
        with pytest.raises(RuleDefinitionError, match="one or more"):
            parse_rules("Signup", [])

    def test_single_string_rejected(self):
        with pytest.raises(RuleDefinitionError, match="list of rule strings"):
            parse_rules("Signup", "email,email,required")

    def test_normalize_title(self):
        assert normalize_title("  User Register ") == "user register"
