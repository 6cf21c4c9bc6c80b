import re

LEGAL_SUFFIXES = [
    "inc", "incorporated", "corp", "corporation", "co", "company", "companies",
    "llc", "llp", "ltd", "limited", "plc", "gmbh", "ag", "sa", "nv", "bv",
    "group", "holdings", "holding", "enterprises", "enterprise",
    "international", "intl", "global", "worldwide",
    "usa", "us", "america", "americas",
    "services", "service", "solutions", "solution",
    "technologies", "technology", "tech",
    "industries", "industry",
    "partners", "partner", "partnership",
    "associates", "associate",
    "brands", "brand",
    "stores", "store", "retail",
    "restaurants", "restaurant",
    "foods", "food", "beverages", "beverage",
    "the",
]

# ASCII word characters only, so accented letters are treated as punctuation
_SUFFIX_RE = re.compile(r"\b(" + "|".join(LEGAL_SUFFIXES) + r")\b", re.ASCII)
_QUOTES_RE = re.compile(r"['`]")
_DASHES_RE = re.compile(r"[-–—]")
_PUNCT_RE = re.compile(r"[^\w\s]", re.ASCII)
_DIGITS_RE = re.compile(r"\d+", re.ASCII)
_SINGLE_CHAR_RE = re.compile(r"\b\w\b", re.ASCII)
_SPACES_RE = re.compile(r"\s+")


def normalize_company(company: str | None) -> str:
    """Canonical form of a company name used by every matcher.

    "The Home Depot, Inc." -> "home depot", "Wal-Mart" -> "wal mart",
    "AT&T" -> "at and t".
    """
    if not company:
        return ""
    s = company.lower()
    s = _QUOTES_RE.sub("", s)
    s = s.replace("&", " and ")
    s = _DASHES_RE.sub(" ", s)
    s = s.replace(".", "").replace(",", "")
    s = _PUNCT_RE.sub(" ", s)
    s = _SUFFIX_RE.sub("", s)
    return _SPACES_RE.sub(" ", s).strip()


def normalize_for_phonetic(company: str | None) -> str:
    """Stricter variant for phonetic encoders: no digits, no single letters."""
    s = normalize_company(company)
    s = _DIGITS_RE.sub("", s)
    s = _SINGLE_CHAR_RE.sub("", s)
    return _SPACES_RE.sub(" ", s).strip()


def tokenize(company: str | None) -> list[str]:
    return [t for t in normalize_company(company).split() if t]


def normalized_key(company: str | None) -> str:
    # "Wal-Mart" and "Walmart" both become "walmart"
    return _SPACES_RE.sub("", normalize_company(company))
