from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from csv2beancount.config import load_config, parse_config
from tests.helpers.configs import BASE_YAML, dedent


def test_minimal_document_uses_defaults():
    cfg = parse_config(BASE_YAML)

    assert cfg.transactions is None
    csv_cfg = cfg.csv
    assert csv_cfg.currency == "USD"
    assert (csv_cfg.date, csv_cfg.amount_in, csv_cfg.amount_out, csv_cfg.description) == (
        0,
        1,
        2,
        3,
    )
    # Absent optionals stay ``None``; effective values carry the defaults.
    assert csv_cfg.payee is None
    assert csv_cfg.delimiter is None and csv_cfg.effective_delimiter == ","
    assert csv_cfg.quote is None and csv_cfg.effective_quote == '"'
    assert csv_cfg.skip is None and csv_cfg.effective_skip == 0
    assert csv_cfg.toggle_sign is None and csv_cfg.sign_toggled is False


def test_full_document_with_rules(write_file):
    text = BASE_YAML + dedent(
        """
          payee: 4
          delimiter: ";"
          quote: "'"
          skip: 2
          toggle_sign: true
        transactions:
          "AMZN Mktp US":
            account: Expenses:Shopping
            info: Amazon
          "SALARY":
            account: Income:Salary
          "Bakery 42":
            info: Bakery
          "Mystery": {}
        """
    )
    cfg = load_config(write_file("bank.yaml", text))

    csv_cfg = cfg.csv
    assert csv_cfg.payee == 4
    assert csv_cfg.effective_delimiter == ";"
    assert csv_cfg.effective_quote == "'"
    assert csv_cfg.effective_skip == 2
    assert csv_cfg.sign_toggled is True

    rules = cfg.transactions
    assert rules is not None
    assert rules["AMZN Mktp US"].account == "Expenses:Shopping"
    assert rules["AMZN Mktp US"].info == "Amazon"
    assert rules["SALARY"].info is None
    assert rules["Bakery 42"].account is None
    assert rules["Mystery"].account is None and rules["Mystery"].info is None


def test_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_malformed_yaml_is_value_error():
    with pytest.raises(ValueError, match="invalid YAML"):
        parse_config("csv: [unclosed")


@pytest.mark.parametrize("text", ["", "# only a comment\n"])
def test_empty_document_is_rejected(text: str):
    with pytest.raises(ValueError, match="empty"):
        parse_config(text)


def test_non_mapping_root_is_rejected():
    with pytest.raises(ValueError, match="must be a mapping"):
        parse_config("- a\n- b\n")


def test_missing_required_field_is_schema_error():
    text = BASE_YAML.replace("  currency: USD\n", "")
    with pytest.raises(ValidationError, match="currency"):
        parse_config(text)


def test_column_index_must_be_an_integer():
    text = BASE_YAML.replace("date: 0", 'date: "0"')
    with pytest.raises(ValidationError):
        parse_config(text)


def test_negative_column_index_is_rejected():
    text = BASE_YAML.replace("description: 3", "description: -1")
    with pytest.raises(ValidationError):
        parse_config(text)


def test_delimiter_must_be_single_character():
    with pytest.raises(ValidationError):
        parse_config(BASE_YAML + '  delimiter: ";;"\n')


def test_toggle_sign_must_be_boolean():
    with pytest.raises(ValidationError):
        parse_config(BASE_YAML + '  toggle_sign: "yes"\n')


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError, match="amount_inn"):
        parse_config(BASE_YAML + "  amount_inn: 5\n")


def test_schema_errors_are_value_errors():
    # The CLI reports configuration problems through a single ``ValueError`` branch.
    with pytest.raises(ValueError):
        parse_config("csv: {}\n")


def test_config_is_immutable():
    cfg = parse_config(BASE_YAML)
    with pytest.raises(ValidationError):
        cfg.csv.currency = "EUR"  # type: ignore[misc]


def test_rule_keys_keep_their_source_text():
    text = BASE_YAML + dedent(
        """
        transactions:
          1234:
            account: Expenses:Check
          2023-01-05:
            info: New year
          ON:
            account: Expenses:Ontario
          0x1F:
            info: Hex
          "007":
            info: Quoted
        """
    )
    rules = parse_config(text).transactions

    assert rules is not None
    assert set(rules) == {"1234", "2023-01-05", "ON", "0x1F", "007"}
    assert rules["1234"].account == "Expenses:Check"
    assert rules["2023-01-05"].info == "New year"
    assert rules["ON"].account == "Expenses:Ontario"


def test_bare_numbers_and_dates_in_text_fields_become_strings():
    text = dedent(
        """
        csv:
          currency: 840
          processing_account: Assets:Checking
          default_account: Expenses:Unknown
          date_format: "%Y-%m-%d"
          date: 0
          amount_in: 1
          amount_out: 2
          description: 3
        transactions:
          "CHECK":
            info: 1234
          "NEW YEAR":
            info: 2023-01-05
        """
    )
    cfg = parse_config(text)

    assert cfg.csv.currency == "840"
    assert cfg.transactions is not None
    assert cfg.transactions["CHECK"].info == "1234"
    assert cfg.transactions["NEW YEAR"].info == "2023-01-05"


def test_boolean_text_field_is_still_rejected():
    with pytest.raises(ValidationError):
        parse_config(BASE_YAML.replace("currency: USD", "currency: true"))


def test_merge_keys_still_work():
    text = BASE_YAML + dedent(
        """
        transactions:
          "BAKERY": &food
            account: Expenses:Food
          "DELI":
            <<: *food
            info: Deli
        """
    )
    rules = parse_config(text).transactions

    assert rules is not None
    assert rules["DELI"].account == "Expenses:Food"
    assert rules["DELI"].info == "Deli"
    assert "<<" not in rules
