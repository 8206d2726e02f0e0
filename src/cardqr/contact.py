"""
Business contact record and its vCard 3.0 serialization.
"""

from dataclasses import dataclass, fields
from typing import Optional


VCARD_LINE_WIDTH = 75


# =============================================================================
# CONTACT RECORD
# =============================================================================
@dataclass
class ContactRecord:
    first_name: str = ""
    last_name: str = ""
    organization: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    mobile: str = ""
    website: str = ""
    address: str = ""
    note: str = ""

    # (attribute, form label) in the order the form shows them
    FIELDS = (
        ("first_name", "First Name"),
        ("last_name", "Last Name"),
        ("organization", "Organization"),
        ("title", "Title"),
        ("email", "Email"),
        ("phone", "Phone"),
        ("mobile", "Mobile"),
        ("website", "Website"),
        ("address", "Address"),
        ("note", "Note"),
    )

    def is_blank(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


# =============================================================================
# VCARD ENCODING
# =============================================================================
def escape_vcard_value(s: Optional[str]) -> str:
    if not s:
        return ""
    s = s.replace("\\", "\\\\")
    s = s.replace(";", "\\;")
    s = s.replace(",", "\\,")
    s = s.replace("\r\n", "\\n").replace("\n", "\\n")
    return s


def fold_vcard_line(line: str, width: int = VCARD_LINE_WIDTH) -> str:
    """Fold at ``width`` UTF-8 octets, never inside a code point.

    Continuation lines start with a space, which counts toward the width.
    """
    if len(line.encode("utf-8")) <= width:
        return line

    parts = []
    current = ""
    used = 0
    limit = width
    for ch in line:
        size = len(ch.encode("utf-8"))
        if used + size > limit:
            parts.append(current)
            current, used = "", 0
            limit = width - 1
        current += ch
        used += size
    parts.append(current)
    return "\n ".join(parts)


def encode_vcard(record: ContactRecord, escape: bool = False) -> str:
    """Serialize a contact as vCard 3.0 text.

    Fields are inserted verbatim unless ``escape`` is set, in which case
    reserved characters are escaped and long lines are folded. Name lines
    are always present; every other property is emitted only when its
    field is non-empty. Lines are joined with ``\\n`` and there is no
    terminator after ``END:VCARD``.
    """
    value = escape_vcard_value if escape else (lambda s: s)

    first = value(record.first_name)
    last = value(record.last_name)

    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"N:{last};{first};;;",
        f"FN:{first} {last}",
    ]

    optional = [
        ("ORG:{}", record.organization),
        ("TITLE:{}", record.title),
        ("EMAIL;type=WORK,INTERNET:{}", record.email),
        ("TEL;type=WORK,voice:{}", record.phone),
        ("TEL;type=CELL,voice:{}", record.mobile),
        ("URL:{}", record.website),
        ("ADR;type=WORK:;;{};;;;", record.address),
        ("NOTE:{}", record.note),
    ]
    for template, field_value in optional:
        if field_value:
            lines.append(template.format(value(field_value)))

    lines.append("END:VCARD")

    if escape:
        lines = [fold_vcard_line(line) for line in lines]
    return "\n".join(lines)
