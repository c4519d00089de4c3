from jobtrail.threads.rules import DEFAULT_RULES
from jobtrail.threads.subject import normalize_subject, strip_leading_prefixes


def test_reminder_prefix_collapses_onto_plain_subject():
    assert normalize_subject("Reminder - Q2 Software Engineer Interview") == normalize_subject(
        "Q2 Software Engineer Interview"
    )
    assert normalize_subject("Q2 Software Engineer Interview") == "q2 software engineer interview"


def test_stacked_reply_and_forward_prefixes_are_stripped():
    assert strip_leading_prefixes("RE: Fwd: Reminder - Onsite interview") == "Onsite interview"
    assert normalize_subject("Re: RE: fw: Onsite interview") == "onsite interview"


def test_reply_prefix_requires_colon():
    # "Review" starts with "re" but is not a reply marker
    assert normalize_subject("Review of your application") == "review of your appiication"


def test_notice_prefixes_with_and_without_separator():
    assert normalize_subject("URGENT: Onsite interview") == "onsite interview"
    assert normalize_subject("Action Required Onsite interview") == "onsite interview"
    assert normalize_subject("Urgent! Onsite interview") == "onsite interview"


def test_personalization_suffix_is_stripped():
    assert normalize_subject("Onsite Interview - Jane Doe") == "onsite interview"
    assert normalize_subject("Onsite Interview – Jane Q Doe") == "onsite interview"


def test_lowercase_words_after_dash_are_kept():
    assert normalize_subject("Onsite Interview - next steps") == "onsite interview - next steps"


def test_administrative_suffixes_are_stripped():
    assert normalize_subject("Onsite Interview Confirmed - Jane Doe") == "onsite interview"
    assert normalize_subject("Onsite interview: please confirm") == "onsite interview"
    assert normalize_subject("Onsite interview - RSVP") == "onsite interview"
    assert normalize_subject("Onsite interview scheduled confirmation") == "onsite interview"


def test_administrative_suffix_with_confusable_letters():
    # "availability" contains l's, which fold to i before suffix matching
    assert normalize_subject("Phone screen availability request") == "phone screen"


def test_confusable_characters_fold_to_i():
    assert normalize_subject("Fina| round") == normalize_subject("Final round")
    assert normalize_subject("Final round") == "finai round"


def test_whitespace_is_collapsed():
    assert normalize_subject("  Onsite    interview \t round  ") == "onsite interview round"


def test_empty_and_missing_subjects():
    assert normalize_subject("") == ""
    assert normalize_subject(None) == ""
    assert normalize_subject("Re:") == ""


def test_custom_rules_replace_the_prefix_list():
    rules = DEFAULT_RULES.with_overrides({"notice_prefixes": ["heads up"]})
    assert normalize_subject("Heads up - Onsite interview", rules) == "onsite interview"
    assert normalize_subject("Reminder - Onsite interview", rules) == "reminder - onsite interview"
