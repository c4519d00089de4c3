"""
Module: grouping_data
Purpose: Pattern lists used by the thread grouping heuristics.
Dependencies: None (pure data, no imports)

Separates grouping policy data from grouping logic. Edit this file (or
point JOBTRAIL_GROUPING_RULES at a YAML override) to tune the lists
without touching the algorithm in company.py / subject.py / grouper.py.
"""

# ---------------------------------------------------------------------------
# Recruiting platforms (ATS) that send on behalf of employers.
# A sender domain containing one of these does not identify the employer.
# ---------------------------------------------------------------------------

ATS_PLATFORM_DOMAINS: tuple[str, ...] = (
    "myworkday",
    "smartrecruiters",
    "greenhouse",
    "lever",
    "ashbyhq",
    "icims",
)

# Local parts on ATS domains that name the platform mailer, not the employer
GENERIC_SENDER_ALIASES: tuple[str, ...] = (
    "notification",
    "notifications",
    "no-reply",
    "noreply",
    "do-not-reply",
    "donotreply",
)

# "<Company> Hiring Team", "<Company> Talent Acquisition", ...
DISPLAY_NAME_COMPANY_MARKERS: tuple[str, ...] = (
    "hiring",
    "recruitment",
    "recruiting",
    "talent",
    "careers",
)

# ---------------------------------------------------------------------------
# Employer domain suffixes: q2ebanking -> q2, acmecareers -> acme.
# Checked in order; the first suffix leaving a root of MIN_ROOT_LENGTH wins.
# ---------------------------------------------------------------------------

COMPANY_DOMAIN_SUFFIXES: tuple[str, ...] = (
    "ebanking",
    "banking",
    "interviews",
    "hiring",
    "talent",
    "hr",
    "recruitment",
    "careers",
)

MIN_ROOT_LENGTH: int = 2

# Second-level labels under country TLDs (acme.co.uk -> acme)
COUNTRY_SECOND_LEVEL_LABELS: tuple[str, ...] = ("co", "com", "org", "net", "ac", "gov")

# ---------------------------------------------------------------------------
# Subject normalization
# ---------------------------------------------------------------------------

# Reply/forward markers only count with a colon ("Re:", "Fwd:")
REPLY_FORWARD_PREFIXES: tuple[str, ...] = ("re", "fw", "fwd", "aw")

# Word prefixes stripped with or without a following separator
NOTICE_PREFIXES: tuple[str, ...] = (
    "reminder",
    "urgent",
    "action required",
)

# Trailing words that differ between otherwise identical scheduling mails
ADMINISTRATIVE_SUFFIXES: tuple[str, ...] = (
    "please confirm",
    "action required",
    "availability request",
    "confirmation",
    "confirmed",
    "scheduled",
    "rsvp",
    "booking",
)

# Characters that OCR'd or stylized subjects swap for one another
CONFUSABLE_CHARACTERS: dict[str, str] = {
    "l": "i",
    "|": "i",
}
