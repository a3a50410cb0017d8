"""
Deterministic conversion rules.

This file exists to make the card format and the accepted inputs explicit.
"""

VCARD_VERSION = "3.0"
LINE_TERMINATOR = "\n"

FIELD_VOCABULARY = (
    "name",
    "firstname",
    "lastname",
    "email",
    "phone",
    "mobile",
    "street",
    "city",
    "state",
    "zip",
    "country",
    "company",
    "title",
    "website",
)

ADDRESS_FIELDS = ("street", "city", "state", "zip", "country")

XLSX_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)
SUPPORTED_EXTENSIONS = XLSX_EXTENSIONS + CSV_EXTENSIONS
LEGACY_EXCEL_EXTENSION = ".xls"

CSV_DELIMITERS = [",", ";", "\t", "|"]

CARD_EXTENSION = ".vcf"
CARD_ENCODING = "utf-8"
