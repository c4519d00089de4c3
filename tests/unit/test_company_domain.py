"""
Tests for company token extraction from sender addresses.

See: jobtrail/threads/company.py
"""

from jobtrail.threads.company import (
    company_from_display_name,
    company_from_subject,
    extract_company_domain,
    is_ats_domain,
    registrable_label,
    strip_company_suffix,
)
from jobtrail.threads.rules import DEFAULT_RULES


class TestRegistrableLabel:
    def test_second_to_last_label(self):
        assert registrable_label("q2ebanking.com") == "q2ebanking"
        assert registrable_label("mail.acme.com") == "acme"

    def test_country_second_level_domain(self):
        assert registrable_label("mail.acme.co.uk") == "acme"
        assert registrable_label("acme.com.au") == "acme"

    def test_single_label(self):
        assert registrable_label("localhost") == "localhost"
        assert registrable_label("") == ""


class TestSuffixStripping:
    def test_first_matching_suffix_wins(self):
        assert strip_company_suffix("q2ebanking") == "q2"
        assert strip_company_suffix("acmecareers") == "acme"
        assert strip_company_suffix("globexhiring") == "globex"

    def test_root_must_be_long_enough(self):
        assert strip_company_suffix("hr") == "hr"
        assert strip_company_suffix("xhr") == "xhr"
        assert strip_company_suffix("talent") == "talent"

    def test_unrelated_label_is_unchanged(self):
        assert strip_company_suffix("acme") == "acme"


class TestAtsDetection:
    def test_platform_label(self):
        assert is_ats_domain("myworkday.com") == "myworkday"
        assert is_ats_domain("acme.wd5.myworkday.com") == "myworkday"

    def test_platform_mail_subdomain(self):
        assert is_ats_domain("us.greenhouse-mail.io") == "greenhouse"

    def test_employer_domain_is_not_ats(self):
        assert is_ats_domain("acme.com") is None
        # Substring of a label is not enough
        assert is_ats_domain("cleverco.com") is None


class TestExtractCompanyDomain:
    def test_plain_employer_address(self):
        assert extract_company_domain("jane@acme.com") == "acme"
        assert extract_company_domain("Jane Doe <Jane@ACME.com>") == "acme"

    def test_suffix_stripped_employer_domain(self):
        assert extract_company_domain("Recruiting <talent@q2ebanking.com>") == "q2"

    def test_non_alphanumeric_characters_are_removed(self):
        assert extract_company_domain("jobs@my-company.com") == "mycompany"

    def test_ats_local_part_names_the_employer(self):
        assert extract_company_domain("acme@myworkday.com") == "acme"
        assert extract_company_domain("acme.corp@myworkday.com") == "acmecorp"

    def test_ats_generic_alias_falls_back_to_display_name(self):
        sender = '"Acme Hiring Team" <notifications@greenhouse.io>'
        assert extract_company_domain(sender) == "acme"

    def test_ats_generic_alias_falls_back_to_subject(self):
        sender = "Greenhouse <no-reply@greenhouse.io>"
        assert extract_company_domain(sender, "Globex: Interview invitation") == "globex"

    def test_ats_platform_subdomain_with_display_name(self):
        sender = "Initech Recruiting <no-reply@us.greenhouse-mail.io>"
        assert extract_company_domain(sender) == "initech"

    def test_ats_with_nothing_to_recover_uses_platform_label(self):
        assert extract_company_domain("no-reply@greenhouse.io", "Your application") == "greenhouse"

    def test_sender_without_address(self):
        assert extract_company_domain("Acme Careers") == ""
        assert extract_company_domain("") == ""
        assert extract_company_domain(None) == ""

    def test_custom_suffix_list(self):
        rules = DEFAULT_RULES.with_overrides({"company_domain_suffixes": ["jobs"]})
        assert extract_company_domain("x@acmejobs.com", rules=rules) == "acme"
        assert extract_company_domain("x@q2ebanking.com", rules=rules) == "q2ebanking"


class TestRecoveryHelpers:
    def test_display_name_markers(self):
        assert company_from_display_name("Globex Talent Acquisition <x@lever.co>") == "globex"
        assert company_from_display_name("Jane Doe <x@lever.co>") == ""
        assert company_from_display_name("x@lever.co") == ""

    def test_subject_leading_company(self):
        assert company_from_subject("Reminder - Acme: Interview on Friday") == "acme"
        assert company_from_subject("Acme | Application update") == "acme"
        assert company_from_subject("Initech - Next steps") == "initech"
        assert company_from_subject("Your interview") == ""
