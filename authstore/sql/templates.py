"""SQL template placeholder substitution: $TABLE_NAME$, $SESSION_TABLE_NAME$, $EMAIL_UNIQUE$, $UPDATE_CONTENT$."""
import re
from typing import Dict, Iterable, Mapping, Optional

from authstore.errors import UnresolvedPlaceholderError

TABLE_NAME = "$TABLE_NAME$"
SESSION_TABLE_NAME = "$SESSION_TABLE_NAME$"
EMAIL_UNIQUE = "$EMAIL_UNIQUE$"
UPDATE_CONTENT = "$UPDATE_CONTENT$"

DEFAULT_REPLACEMENTS: Mapping[str, str] = {
    TABLE_NAME: "auth_user",
    SESSION_TABLE_NAME: "auth_session",
    EMAIL_UNIQUE: "UNIQUE",
}

_PLACEHOLDER_RE = re.compile(r"\$[A-Z_]+\$")


def find_placeholders(text: str) -> list:
    return _PLACEHOLDER_RE.findall(text)


class SQLTemplateReplacer:
    """Replaces placeholder tokens in SQL templates with configured text.

    Built once per storage instance; ``apply`` is a pure function of the template
    and the mapping, so applying it twice gives identical text.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None) -> None:
        self._mapping: Dict[str, str] = dict(DEFAULT_REPLACEMENTS)
        if mapping:
            self.update(mapping)

    @property
    def mapping(self) -> Dict[str, str]:
        return dict(self._mapping)

    def update(self, mapping: Mapping[str, str]) -> None:
        """Override replacements. Keys must be tokens of the form $NAME$."""
        for key, value in mapping.items():
            if not _PLACEHOLDER_RE.fullmatch(key):
                raise ValueError(f'invalid placeholder "{key}": expected $NAME$')
            if key == UPDATE_CONTENT:
                raise ValueError(f"{UPDATE_CONTENT} is filled per statement and cannot be overridden")
            self._mapping[key] = "" if value is None else str(value)

    def apply(self, template: str, keep: Iterable[str] = ()) -> str:
        """Return ``template`` with every known token replaced.

        Tokens still present afterwards raise UnresolvedPlaceholderError unless
        listed in ``keep``.
        """
        if not template:
            return template
        # single pass so a replacement value is never itself rescanned
        pattern = re.compile("|".join(re.escape(k) for k in sorted(self._mapping, key=len, reverse=True)))
        result = pattern.sub(lambda m: self._mapping[m.group(0)], template)
        keep = set(keep)
        left = [p for p in find_placeholders(result) if p not in keep]
        if left:
            raise UnresolvedPlaceholderError(left)
        return result


def default_replacer() -> SQLTemplateReplacer:
    return SQLTemplateReplacer()
