"""
MySQL statement templates and the query bundles built from them.

Templates contain placeholder tokens (see authstore.sql.templates); values are
always bound as %s parameters.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from authstore.errors import InvalidFieldName, UnresolvedPlaceholderError
from authstore.sql.templates import UPDATE_CONTENT, SQLTemplateReplacer, find_placeholders

MYSQL_USERS_INIT = """CREATE TABLE IF NOT EXISTS $TABLE_NAME$ (
id BIGINT AUTO_INCREMENT,
username VARCHAR(150) NOT NULL UNIQUE,
password VARCHAR(270) NOT NULL,
email VARCHAR(254) NOT NULL $EMAIL_UNIQUE$,
first_name VARCHAR(50) NOT NULL,
last_name VARCHAR(150) NOT NULL,
is_superuser BOOL NOT NULL,
is_staff BOOL NOT NULL,
is_active BOOL NOT NULL,
date_joined DATETIME NOT NULL,
last_login DATETIME NOT NULL,
PRIMARY KEY(id)
);
"""

MYSQL_QUERY_USERID = "SELECT * FROM $TABLE_NAME$ WHERE id=%s;"

MYSQL_QUERY_USERNAME = "SELECT * FROM $TABLE_NAME$ WHERE username=%s;"

MYSQL_QUERY_USERMAIL = "SELECT * FROM $TABLE_NAME$ WHERE email=%s;"

MYSQL_INSERT_USER = """INSERT INTO $TABLE_NAME$(
username, password, email, first_name, last_name, is_superuser, is_staff,
is_active, date_joined, last_login)
VALUES(%s, %s, %s, %s, %s, %s, %s, %s, %s, %s);"""

MYSQL_UPDATE_USER = """UPDATE $TABLE_NAME$
SET username=%s, password=%s, email=%s, first_name=%s, last_name=%s,
    is_superuser=%s, is_staff=%s, is_active=%s, date_joined=%s, last_login=%s
WHERE id=%s;"""

MYSQL_DELETE_USER = "DELETE FROM $TABLE_NAME$ WHERE id = %s;"

MYSQL_UPDATE_USER_FIELDS = """UPDATE $TABLE_NAME$
SET $UPDATE_CONTENT$
WHERE id = %s;"""

MYSQL_SESSIONS_INIT = """CREATE TABLE IF NOT EXISTS $SESSION_TABLE_NAME$ (
session_key VARCHAR(150) NOT NULL,
user_id BIGINT NOT NULL,
expire_date DATETIME NOT NULL,
PRIMARY KEY(session_key),
INDEX idx_user_id (user_id)
);
"""

MYSQL_INSERT_SESSION = "INSERT INTO $SESSION_TABLE_NAME$ (session_key, user_id, expire_date) VALUES(%s, %s, %s);"

MYSQL_GET_SESSION = "SELECT session_key, user_id, expire_date FROM $SESSION_TABLE_NAME$ WHERE session_key=%s;"

MYSQL_DELETE_SESSION = "DELETE FROM $SESSION_TABLE_NAME$ WHERE session_key=%s;"

MYSQL_CLEAN_UP_SESSIONS = "DELETE FROM $SESSION_TABLE_NAME$ WHERE expire_date < %s;"

MYSQL_DELETE_FOR_USER_SESSIONS = "DELETE FROM $SESSION_TABLE_NAME$ WHERE user_id=%s;"

# Logical UserModel field name -> user table column
DEFAULT_USER_ROW_NAMES: Mapping[str, str] = MappingProxyType({
    "ID": "id",
    "Username": "username",
    "Password": "password",
    "EMail": "email",
    "FirstName": "first_name",
    "LastName": "last_name",
    "IsSuperUser": "is_superuser",
    "IsStaff": "is_staff",
    "IsActive": "is_active",
    "DateJoined": "date_joined",
    "LastLogin": "last_login",
})

DEFAULT_SESSION_ROW_NAMES: Mapping[str, str] = MappingProxyType({
    "Key": "session_key",
    "User": "user_id",
    "ExpireDate": "expire_date",
})


def default_mysql_replacer() -> SQLTemplateReplacer:
    return SQLTemplateReplacer()


class MySQLQueries:
    """User statements for MySQL, built once from the templates above.

    ``columns`` matches the fixed templates and is used to scan rows;
    ``row_names`` only decides which fields a partial update accepts.
    An empty ``update_fields_template`` disables partial updates; ``update_user``
    then always returns the full update statement.
    """

    def __init__(
        self,
        replace_mapping: Optional[Mapping[str, str]] = None,
        row_names: Optional[Mapping[str, str]] = None,
        update_fields_template: str = MYSQL_UPDATE_USER_FIELDS,
    ) -> None:
        replacer = default_mysql_replacer()
        if replace_mapping:
            replacer.update(replace_mapping)
        self.replacer = replacer
        self.columns: Mapping[str, str] = DEFAULT_USER_ROW_NAMES
        self.row_names: Mapping[str, str] = MappingProxyType(
            dict(DEFAULT_USER_ROW_NAMES if row_names is None else row_names)
        )
        self._init = (replacer.apply(MYSQL_USERS_INIT),)
        self._get_user = replacer.apply(MYSQL_QUERY_USERID)
        self._get_user_by_name = replacer.apply(MYSQL_QUERY_USERNAME)
        self._get_user_by_email = replacer.apply(MYSQL_QUERY_USERMAIL)
        self._insert_user = replacer.apply(MYSQL_INSERT_USER)
        self._update_user = replacer.apply(MYSQL_UPDATE_USER)
        self._delete_user = replacer.apply(MYSQL_DELETE_USER)
        self._update_fields = replacer.apply(update_fields_template or "", keep=(UPDATE_CONTENT,))

    def init_users(self) -> List[str]:
        return list(self._init)

    def get_user(self) -> str:
        return self._get_user

    def get_user_by_name(self) -> str:
        return self._get_user_by_name

    def get_user_by_email(self) -> str:
        return self._get_user_by_email

    def insert_user(self) -> str:
        return self._insert_user

    def update_user(self, fields: Optional[Sequence[str]] = None) -> str:
        """Full update statement, or one assigning exactly ``fields`` (logical names).

        Raises InvalidFieldName for a name missing from ``row_names``.
        """
        if not fields or not self.supports_user_fields():
            return self._update_user
        updates = []
        for field_name in fields:
            column = self.row_names.get(field_name)
            if column is None:
                raise InvalidFieldName(field_name)
            updates.append(column + "=%s")
        stmt = self._update_fields.replace(UPDATE_CONTENT, ",".join(updates), 1)
        left = find_placeholders(stmt)
        if left:
            raise UnresolvedPlaceholderError(left)
        return stmt

    def delete_user(self) -> str:
        return self._delete_user

    def supports_user_fields(self) -> bool:
        return self._update_fields != ""


class MySQLSessionQueries:
    """Session statements for MySQL."""

    def __init__(self, replace_mapping: Optional[Mapping[str, str]] = None) -> None:
        replacer = default_mysql_replacer()
        if replace_mapping:
            replacer.update(replace_mapping)
        self.replacer = replacer
        self.row_names: Mapping[str, str] = DEFAULT_SESSION_ROW_NAMES
        self._init = (replacer.apply(MYSQL_SESSIONS_INIT),)
        self._insert = replacer.apply(MYSQL_INSERT_SESSION)
        self._get = replacer.apply(MYSQL_GET_SESSION)
        self._delete = replacer.apply(MYSQL_DELETE_SESSION)
        self._clean_up = replacer.apply(MYSQL_CLEAN_UP_SESSIONS)
        self._delete_for_user = replacer.apply(MYSQL_DELETE_FOR_USER_SESSIONS)

    def init_sessions(self) -> List[str]:
        return list(self._init)

    def insert_session(self) -> str:
        return self._insert

    def get_session(self) -> str:
        return self._get

    def delete_session(self) -> str:
        return self._delete

    def clean_up_session(self) -> str:
        return self._clean_up

    def delete_for_user_session(self) -> str:
        return self._delete_for_user
