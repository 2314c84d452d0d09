import unittest

from pawpost.schemas.posts import (
    Animal,
    BlacklistAlert,
    BlacklistPost,
    ContactPerson,
    FlaggedIndividual,
    Individual,
    RescueOrganization,
    RescuePost,
    Violation,
)
from pawpost.services.formatter import (
    ALERT_SHARE_PROMPT,
    BLACKLIST_SHARE_PROMPT,
    RESCUE_SHARE_PROMPT,
    format_blacklist_alert,
    format_blacklist_post,
    format_date_for_display,
    format_post,
    format_rescue_post,
)


class TestDateDisplay(unittest.TestCase):

    def test_long_form(self):
        self.assertEqual(format_date_for_display("2025-01-05"), "January 5, 2025")
        self.assertEqual(format_date_for_display("2024-12-31T10:00:00Z"), "December 31, 2024")

    def test_empty(self):
        self.assertEqual(format_date_for_display(""), "")
        self.assertEqual(format_date_for_display(None), "")

    def test_unparsed_draft_value_shown_as_typed(self):
        self.assertEqual(format_date_for_display("next friday"), "next friday")


class TestAlertFormatter(unittest.TestCase):

    def test_critical_alert_without_sections(self):
        post = BlacklistAlert(
            title="Test Alert",
            severity="critical",
            status="investigating",
            individuals=[],
            organizations=[],
            violations=[],
            hashtags=[],
        )
        text = format_blacklist_alert(post)
        first_line = text.split("\n")[0]

        self.assertEqual(first_line, "🆘 CRITICAL WARNING: TEST ALERT 🆘")
        self.assertEqual(text.count("🆘"), 2)
        self.assertIn("CRITICAL WARNING", text)
        self.assertIn("Under Investigation", text)
        self.assertNotIn("FLAGGED INDIVIDUALS", text)
        self.assertNotIn("FLAGGED ORGANIZATIONS", text)
        self.assertNotIn("DOCUMENTED VIOLATIONS", text)

    def test_minimal_alert_is_header_and_share_prompt(self):
        text = format_blacklist_alert(BlacklistAlert(title="Puppy mill", severity="low"))
        self.assertEqual(
            text,
            f"ℹ️ ADVISORY: PUPPY MILL ℹ️\nStatus: Under Investigation\n\n{ALERT_SHARE_PROMPT}",
        )

    def test_violations_and_individuals(self):
        post = BlacklistAlert(
            title="Hoarding case",
            severity="high",
            status="confirmed",
            incident_date="2025-03-02",
            location="Springfield",
            description="Dozens of animals kept in one room.",
            individuals=[FlaggedIndividual(name="John Doe", aliases=["JD", "  ", "Johnny"], role="Owner")],
            violations=[
                Violation(
                    description="No water available",
                    category="neglect",
                    date="2025-03-01",
                    evidence=["https://example.org/a.jpg", "", "https://example.org/b.jpg"],
                ),
                Violation(description="No license", category="unlicensed"),
            ],
            hashtags=["#AnimalWelfare", " ", "StopHoarding"],
        )
        text = format_blacklist_alert(post)

        self.assertTrue(text.startswith("🚨 SERIOUS WARNING: HOARDING CASE 🚨\nStatus: Confirmed\n"))
        self.assertIn("Date: March 2, 2025", text)
        self.assertIn("Location: Springfield", text)
        self.assertIn("\n\n📋 DESCRIPTION\nDozens of animals kept in one room.", text)
        self.assertIn("\n\n👤 FLAGGED INDIVIDUALS\n\n▼ Individual #1\nName: John Doe\nAlso Known As: JD, Johnny\nRole: Owner", text)
        self.assertIn("Category: Neglect\nDetails: No water available\nDate: March 1, 2025", text)
        self.assertIn("Evidence:\n• https://example.org/a.jpg\n• https://example.org/b.jpg", text)
        self.assertIn("▼ Violation #2\nCategory: Unlicensed Operation", text)
        self.assertNotIn("FLAGGED ORGANIZATIONS", text)
        self.assertTrue(text.endswith(f"\n\n#AnimalWelfare #StopHoarding\n\n{ALERT_SHARE_PROMPT}"))


class TestRescueFormatter(unittest.TestCase):

    def test_minimal_post(self):
        text = format_rescue_post(RescuePost(title="Max needs a home"))
        self.assertEqual(
            text,
            "🏠 ⚡ MAX NEEDS A HOME ⚡ 🏠\nType: Adoption\nPriority: Medium Priority\n\n" + RESCUE_SHARE_PROMPT,
        )

    def test_low_urgency_has_no_urgency_emoji(self):
        text = format_rescue_post(RescuePost(title="Found cat", urgency="low", post_type="found"))
        self.assertEqual(text.split("\n")[0], "📍 FOUND CAT 📍")
        self.assertIn("Priority: Low Priority", text)

    def test_blank_text_fields_leave_no_headers(self):
        post = RescuePost(title="Max", description="   ", requirements="", additional_info=None)
        text = format_rescue_post(post)
        self.assertNotIn("DESCRIPTION", text)
        self.assertNotIn("REQUIREMENTS", text)
        self.assertNotIn("ADDITIONAL INFORMATION", text)

    def test_items_numbered_in_list_order(self):
        post = RescuePost(
            title="Litter",
            urgency="critical",
            post_type="emergency",
            deadline="2025-01-05",
            animals=[
                Animal(name="Zed", species="Dog", gender="male", photos=["a.jpg", "  ", "", "b.jpg"]),
                Animal(name="Amy", species="Dog"),
            ],
            contact_persons=[ContactPerson(name="Sam", phone="555-0100", social_media=["", "@sam"])],
            organizations=[RescueOrganization(name="Happy Paws", specializations=["Dogs", "Cats"])],
        )
        text = format_rescue_post(post)

        self.assertEqual(text.split("\n")[0], "🚨 🆘 LITTER 🆘 🚨")
        self.assertIn("Priority: CRITICAL - URGENT", text)
        self.assertIn("Deadline: January 5, 2025", text)
        self.assertLess(text.index("▼ Animal #1\nName: Zed"), text.index("▼ Animal #2\nName: Amy"))
        self.assertIn("Gender: Male", text)
        self.assertIn("Photos: a.jpg, b.jpg", text)
        self.assertIn("\n\n📞 CONTACT INFORMATION\n\n▼ Contact #1\nName: Sam\nPhone: 555-0100\nSocial Media: @sam", text)
        self.assertIn("\n\n🏢 RESCUE ORGANIZATIONS\n\n▼ Organization #1\nName: Happy Paws\nSpecializations: Dogs, Cats", text)

    def test_output_is_deterministic(self):
        post = RescuePost(title="Max", animals=[Animal(name="Max")], hashtags=["adopt"])
        self.assertEqual(format_rescue_post(post), format_rescue_post(post))
        self.assertEqual(format_post(post), format_rescue_post(post))


class TestBlacklistFormatter(unittest.TestCase):

    def test_minimal_case(self):
        text = format_blacklist_post(BlacklistPost(case_title="Fake rescue"))
        self.assertEqual(
            text,
            f"🚨 FAKE RESCUE 🚨\nStatus: Under Investigation\n\n{BLACKLIST_SHARE_PROMPT}",
        )

    def test_full_case(self):
        post = BlacklistPost(
            case_title="Adoption fee scam",
            incident_date="2024-11-20",
            case_status="confirmed",
            brief_description="Collected fees for animals that never existed.",
            individuals=[
                Individual(name="Jane Roe", dob="1990-02-14", email="jane@rescuewatch.org"),
                Individual(name="Rick Roe"),
            ],
            aliases=["Janie", " ", "JR"],
            summary_statement="Do not send money.",
        )
        text = format_blacklist_post(post)

        self.assertIn("Case Date: November 20, 2024\nStatus: Confirmed Fraud", text)
        self.assertIn("\n\n📋 CASE OVERVIEW\nCollected fees", text)
        self.assertIn("▼ Individual #1\nName: Jane Roe\nDOB: February 14, 1990\nEmail: jane@rescuewatch.org", text)
        self.assertIn("▼ Individual #2\nName: Rick Roe", text)
        self.assertIn("\n\n🎭 KNOWN ALIASES\n• Janie\n• JR", text)
        self.assertNotIn("ASSOCIATED ORGANIZATIONS", text)
        self.assertIn("\n\n⚠️ WARNING SUMMARY\nDo not send money.", text)


if __name__ == "__main__":
    unittest.main()
