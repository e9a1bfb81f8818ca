"""String validator: formats, case, length and pattern rules."""

from __future__ import annotations

import ipaddress
import re
import unicodedata
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .base import Schema, State
from .errors import SchemaDefinitionError

_ALPHANUM = re.compile(r"^[a-zA-Z0-9]+$")
_HEX = re.compile(r"^[a-fA-F0-9]+$")
_TOKEN = re.compile(r"^\w+$", re.ASCII)
_ISO_DURATION = re.compile(
    r"^P(?!$)(\d+Y)?(\d+M)?(\d+W)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+S)?)?$"
)
_ISO_DATE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}(:?\d{2})?)?)?$"
)
_DATA_URI = re.compile(r"^data:[\w+.-]+/[\w+.-]+;((charset=[\w-]+|base64),)?(.*)$")
_DOMAIN_LABEL = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")
_UNICODE_LABEL = re.compile(r"^\w(?:[\w-]{0,61}\w)?$")
_TLD = re.compile(r"^[a-zA-Z]{2,63}$|^xn--[a-zA-Z0-9-]{1,59}$")
_ATEXT = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_EMAIL_LOCAL = re.compile(rf"^{_ATEXT}(\.{_ATEXT})*$")
_IP_FUTURE = re.compile(r"^v[0-9a-fA-F]+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+$")

_GUID_VERSIONS = {
    "uuidv1": "1",
    "uuidv2": "2",
    "uuidv3": "3",
    "uuidv4": "4",
    "uuidv5": "5",
}
_NORMALIZE_FORMS = ("NFC", "NFD", "NFKC", "NFKD")
_IP_CIDR = ("optional", "required", "forbidden")
_IP_VERSIONS = ("ipv4", "ipv6", "ipvfuture")


def _base64_regex(padding_required: bool, url_safe: bool) -> re.Pattern[str]:
    chars = "A-Za-z0-9\\-_" if url_safe else "A-Za-z0-9+\\/"
    if padding_required:
        tail = f"(?:[{chars}]{{2}}==|[{chars}]{{3}}=)?"
    else:
        tail = f"(?:[{chars}]{{2}}(==)?|[{chars}]{{3}}=?)?"
    return re.compile(f"^(?:[{chars}]{{4}})*{tail}$")


def _is_domain(value: str, options: Mapping[str, Any]) -> bool:
    if not value or len(value) > 253:
        return False
    labels = value.rstrip(".").split(".")
    min_segments = options.get("min_domain_segments") or 2
    max_segments = options.get("max_domain_segments")
    if len(labels) < min_segments:
        return False
    if max_segments is not None and len(labels) > max_segments:
        return False
    label_re = _UNICODE_LABEL if options.get("allow_unicode", True) else _DOMAIN_LABEL
    if not all(label_re.match(label) for label in labels):
        return False
    return bool(_TLD.match(labels[-1]))


def _is_email(value: str, options: Mapping[str, Any]) -> bool:
    if not options.get("ignore_length") and len(value) > 254:
        return False
    local, sep, domain = value.rpartition("@")
    if not sep or not local or len(local) > 64:
        return False
    if not _EMAIL_LOCAL.match(local):
        return False
    return _is_domain(domain, options)


def _luhn(value: str) -> bool:
    if not value.isdigit():
        return False
    total = 0
    for i, ch in enumerate(reversed(value)):
        digit = int(ch)
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total > 0 and total % 10 == 0


def _guid_regex(separator: Any) -> re.Pattern[str]:
    h = "[0-9a-fA-F]"
    if separator is False:
        body = f"{h}{{8}}{h}{{4}}{h}{{4}}{h}{{4}}{h}{{12}}"
    else:
        sep = "[:-]" if separator in (None, True) else re.escape(separator)
        body = f"{h}{{8}}({sep}){h}{{4}}\\1{h}{{4}}\\1{h}{{4}}\\1{h}{{12}}"
    return re.compile(f"^{body}$")


def _ip_matches(value: str, versions: tuple[str, ...], cidr: str) -> bool:
    address, slash, prefix = value.partition("/")
    if cidr == "required" and not slash:
        return False
    if cidr == "forbidden" and slash:
        return False
    if "ipvfuture" in versions and not slash and _IP_FUTURE.match(value):
        return True
    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return False
    if f"ipv{parsed.version}" not in versions:
        return False
    if slash:
        if not prefix.isdigit():
            return False
        return int(prefix) <= parsed.max_prefixlen
    return True


class StringSchema(Schema):
    """Validates ``str`` values."""

    kind = "string"
    operations = Schema.operations | frozenset(
        {
            "alphanum",
            "base64",
            "case",
            "credit_card",
            "data_uri",
            "domain",
            "email",
            "guid",
            "hex",
            "hostname",
            "ip",
            "iso_date",
            "iso_duration",
            "length",
            "lowercase",
            "max",
            "min",
            "normalize",
            "pattern",
            "token",
            "trim",
            "uppercase",
        }
    )

    def _coerce(self, value: Any, state: State) -> Any:
        if not isinstance(value, str):
            state.fail("string.base", value)
        return value

    # -- character classes --------------------------------------------------

    def _regex_rule(self, name: str, code: str, regex: re.Pattern[str]) -> StringSchema:
        def check(value: str, state: State) -> str:
            if not regex.match(value):
                state.fail(code, value)
            return value

        return self._with_rule(name, check)

    def alphanum(self) -> StringSchema:
        return self._regex_rule("alphanum", "string.alphanum", _ALPHANUM)

    def token(self) -> StringSchema:
        return self._regex_rule("token", "string.token", _TOKEN)

    def hex(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        byte_aligned = bool((options or {}).get("byte_aligned"))

        def check(value: str, state: State) -> str:
            if not _HEX.match(value):
                state.fail("string.hex", value)
            if byte_aligned and len(value) % 2:
                if state.prefs.convert:
                    return "0" + value
                state.fail("string.hexAlign", value)
            return value

        return self._with_rule("hex", check)

    def iso_duration(self) -> StringSchema:
        return self._regex_rule("isoDuration", "string.isoDuration", _ISO_DURATION)

    def iso_date(self) -> StringSchema:
        def check(value: str, state: State) -> str:
            if not _ISO_DATE.match(value):
                state.fail("string.isoDate", value)
            try:
                datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                state.fail("string.isoDate", value)
            return value

        return self._with_rule("isoDate", check)

    # -- case, whitespace, normalization ----------------------------------

    def case(self, direction: str) -> StringSchema:
        if direction == "lower":
            return self.lowercase()
        if direction == "upper":
            return self.uppercase()
        raise SchemaDefinitionError(f"Invalid case: {direction!r}")

    def lowercase(self) -> StringSchema:
        def check(value: str, state: State) -> str:
            if state.prefs.convert:
                return value.lower()
            if value != value.lower():
                state.fail("string.lowercase", value)
            return value

        return self._with_rule("case", check, direction="lower")

    def uppercase(self) -> StringSchema:
        def check(value: str, state: State) -> str:
            if state.prefs.convert:
                return value.upper()
            if value != value.upper():
                state.fail("string.uppercase", value)
            return value

        return self._with_rule("case", check, direction="upper")

    def trim(self, enabled: bool = True) -> StringSchema:
        if not enabled:
            return self

        def check(value: str, state: State) -> str:
            if state.prefs.convert:
                return value.strip()
            if value != value.strip():
                state.fail("string.trim", value)
            return value

        return self._with_rule("trim", check)

    def normalize(self, form: str = "NFC") -> StringSchema:
        form = form.upper()
        if form not in _NORMALIZE_FORMS:
            raise SchemaDefinitionError(
                f"normalization form must be one of {', '.join(_NORMALIZE_FORMS)}"
            )

        def check(value: str, state: State) -> str:
            normalized = unicodedata.normalize(form, value)  # type: ignore[arg-type]
            if state.prefs.convert:
                return normalized
            if value != normalized:
                state.fail("string.normalize", value, form=form)
            return value

        return self._with_rule("normalize", check, form=form)

    # -- length ---------------------------------------------------------------

    def _length_rule(
        self, name: str, code: str, limit: int, encoding: str | None, compare: Any
    ) -> StringSchema:
        if not isinstance(limit, int) or limit < 0:
            raise SchemaDefinitionError(f"{name} limit must be a positive integer")

        def check(value: str, state: State) -> str:
            size = len(value.encode(encoding)) if encoding else len(value)
            if not compare(size, limit):
                if value == "":
                    state.fail("string.empty", value)
                state.fail(code, value, limit=limit, encoding=encoding)
            return value

        return self._with_rule(name, check, limit=limit, encoding=encoding)

    def length(self, limit: int, encoding: str | None = None) -> StringSchema:
        return self._length_rule(
            "length", "string.length", limit, encoding, lambda s, n: s == n
        )

    def max(self, limit: int, encoding: str | None = None) -> StringSchema:
        return self._length_rule(
            "max", "string.max", limit, encoding, lambda s, n: s <= n
        )

    def min(self, limit: int, encoding: str | None = None) -> StringSchema:
        return self._length_rule(
            "min", "string.min", limit, encoding, lambda s, n: s >= n
        )

    # -- patterns -------------------------------------------------------------

    def pattern(
        self,
        regex: re.Pattern[str] | str,
        options: Mapping[str, Any] | None = None,
    ) -> StringSchema:
        compiled = re.compile(regex) if isinstance(regex, str) else regex
        opts = options or {}
        name = opts.get("name")
        invert = bool(opts.get("invert"))
        if invert:
            code = "string.pattern.invert." + ("name" if name else "base")
        else:
            code = "string.pattern.name" if name else "string.pattern.base"

        def check(value: str, state: State) -> str:
            if bool(compiled.search(value)) == invert:
                state.fail(code, value, name=name, regex=compiled.pattern)
            return value

        return self._with_rule(
            "pattern", check, regex=compiled.pattern, pattern_name=name
        )

    # -- formats --------------------------------------------------------------

    def base64(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        opts = options or {}
        regex = _base64_regex(
            opts.get("padding_required", True) is not False,
            bool(opts.get("url_safe")),
        )
        return self._regex_rule("base64", "string.base64", regex)

    def data_uri(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        padding_required = (options or {}).get("padding_required", True) is not False
        encoded = _base64_regex(padding_required, url_safe=False)

        def check(value: str, state: State) -> str:
            match = _DATA_URI.match(value)
            if match is None:
                state.fail("string.dataUri", value)
            if match.group(2) == "base64" and not encoded.match(match.group(3)):
                state.fail("string.dataUri", value)
            return value

        return self._with_rule("dataUri", check)

    def credit_card(self) -> StringSchema:
        def check(value: str, state: State) -> str:
            if not _luhn(value):
                state.fail("string.creditCard", value)
            return value

        return self._with_rule("creditCard", check)

    def domain(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        opts = dict(options or {})

        def check(value: str, state: State) -> str:
            if not _is_domain(value, opts):
                state.fail("string.domain", value)
            return value

        return self._with_rule("domain", check)

    def email(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        opts = dict(options or {})
        separator = opts.get("separator") or ","
        multiple = bool(opts.get("multiple"))

        def check(value: str, state: State) -> str:
            addresses = value.split(separator) if multiple else [value]
            invalid = [a.strip() for a in addresses if not _is_email(a.strip(), opts)]
            if invalid:
                state.fail("string.email", value, invalids=invalid)
            return value

        return self._with_rule("email", check)

    def hostname(self) -> StringSchema:
        def check(value: str, state: State) -> str:
            if _ip_matches(value, ("ipv4", "ipv6"), "forbidden"):
                return value
            labels = value.rstrip(".").split(".")
            valid = all(_DOMAIN_LABEL.match(part) for part in labels)
            if len(value) > 255 or not valid:
                state.fail("string.hostname", value)
            return value

        return self._with_rule("hostname", check)

    def guid(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        opts = options or {}
        versions: list[str] = []
        for version in opts.get("version") or ():
            if version not in _GUID_VERSIONS:
                raise SchemaDefinitionError(f"Invalid GUID version: {version!r}")
            versions.append(_GUID_VERSIONS[version])
        regex = _guid_regex(opts.get("separator"))

        def check(value: str, state: State) -> str:
            body = value[1:-1] if value[:1] == "{" and value[-1:] == "}" else value
            if not regex.match(body):
                state.fail("string.guid", value)
            if versions:
                digits = re.sub(r"[^0-9a-fA-F]", "", body)
                if digits[12] not in versions:
                    state.fail("string.guid", value)
            return value

        return self._with_rule("guid", check)

    def ip(self, options: Mapping[str, Any] | None = None) -> StringSchema:
        opts = options or {}
        cidr = opts.get("cidr") or "optional"
        if cidr not in _IP_CIDR:
            raise SchemaDefinitionError(f"Invalid ip cidr: {cidr!r}")
        requested = tuple(opts.get("version") or ())
        for version in requested:
            if version not in _IP_VERSIONS:
                raise SchemaDefinitionError(f"Invalid ip version: {version!r}")
        versions = requested or _IP_VERSIONS

        def check(value: str, state: State) -> str:
            if not _ip_matches(value, versions, cidr):
                if requested:
                    state.fail(
                        "string.ipVersion", value, cidr=cidr, version=list(requested)
                    )
                state.fail("string.ip", value, cidr=cidr)
            return value

        return self._with_rule("ip", check)


def string() -> StringSchema:
    return StringSchema()
