"""Unit tests for SQLTemplateReplacer."""
import pytest

from authstore.errors import UnresolvedPlaceholderError
from authstore.mysql.queries import MYSQL_UPDATE_USER_FIELDS, MYSQL_USERS_INIT
from authstore.sql.templates import (
    EMAIL_UNIQUE,
    TABLE_NAME,
    UPDATE_CONTENT,
    SQLTemplateReplacer,
    default_replacer,
    find_placeholders,
)


def test_default_replacer_fills_table_and_unique_email():
    """The default replacer fills table name and UNIQUE."""
    sql = default_replacer().apply(MYSQL_USERS_INIT)
    assert "CREATE TABLE IF NOT EXISTS auth_user (" in sql
    assert "email VARCHAR(254) NOT NULL UNIQUE," in sql
    assert find_placeholders(sql) == []


def test_overrides_table_name_and_disables_unique_email():
    """Overrides change the table name and blank UNIQUE."""
    replacer = SQLTemplateReplacer({TABLE_NAME: "members", EMAIL_UNIQUE: ""})
    sql = replacer.apply(MYSQL_USERS_INIT)
    assert "CREATE TABLE IF NOT EXISTS members (" in sql
    assert "email VARCHAR(254) NOT NULL ," in sql
    assert "UNIQUE," not in sql.split("email", 1)[1].split("\n", 1)[0]


def test_apply_is_idempotent():
    """Applying the replacer twice gives the same text."""
    replacer = SQLTemplateReplacer({TABLE_NAME: "members"})
    first = replacer.apply(MYSQL_USERS_INIT)
    second = replacer.apply(MYSQL_USERS_INIT)
    assert first == second
    # output holds no tokens, so applying again changes nothing
    assert replacer.apply(first) == first


def test_unknown_placeholder_raises():
    """A token without a replacement raises UnresolvedPlaceholderError."""
    with pytest.raises(UnresolvedPlaceholderError) as exc_info:
        default_replacer().apply("SELECT * FROM $OTHER_TABLE$ WHERE id=%s;")
    assert exc_info.value.placeholders == ["$OTHER_TABLE$"]


def test_kept_placeholder_survives():
    """Tokens listed in keep stay in the text."""
    sql = default_replacer().apply(MYSQL_UPDATE_USER_FIELDS, keep=(UPDATE_CONTENT,))
    assert find_placeholders(sql) == [UPDATE_CONTENT]
    assert sql.startswith("UPDATE auth_user")


def test_update_rejects_malformed_token():
    """Keys that are not $NAME$ tokens are rejected."""
    with pytest.raises(ValueError):
        SQLTemplateReplacer({"TABLE_NAME": "x"})


def test_mapping_is_a_copy():
    """Changing the returned mapping does not change the replacer."""
    replacer = default_replacer()
    replacer.mapping[TABLE_NAME] = "changed"
    assert replacer.apply("$TABLE_NAME$") == "auth_user"


def test_replacement_value_is_not_rescanned():
    """A replacement value containing a token is not substituted again."""
    replacer = SQLTemplateReplacer({TABLE_NAME: "$EMAIL_UNIQUE$"})
    with pytest.raises(UnresolvedPlaceholderError):
        replacer.apply("SELECT * FROM $TABLE_NAME$;")


def test_update_content_is_not_configurable():
    """The replacer refuses a value for $UPDATE_CONTENT$."""
    with pytest.raises(ValueError):
        SQLTemplateReplacer({UPDATE_CONTENT: "x=1"})
