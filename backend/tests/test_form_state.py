import unittest

from pawpost.core.exceptions import RecordValidationError
from pawpost.schemas.labels import Urgency
from pawpost.schemas.posts import Animal, BlacklistAlert, RescueOrganization, RescuePost
from pawpost.services.form_state import (
    AddHashtag,
    AddItem,
    AddListValue,
    AddSpecialization,
    FormController,
    MoveItem,
    RemoveHashtag,
    RemoveItem,
    RemoveListValue,
    RemoveSpecialization,
    Reset,
    SetField,
    SetListValue,
    UpdateItem,
    default_post,
    reduce,
)
from pawpost.services.formatter import format_post
from pawpost.services.template_store import InMemoryTemplateStore


class TestReduce(unittest.TestCase):

    def setUp(self):
        self.post = RescuePost(title="Max", animals=[Animal(name="Max"), Animal(name="Bella")])

    def test_set_field_returns_new_version(self):
        updated = reduce(self.post, SetField("title", "Max and Bella"))
        self.assertEqual(updated.title, "Max and Bella")
        self.assertEqual(self.post.title, "Max")
        self.assertIsNot(updated, self.post)

    def test_set_field_coerces_enum(self):
        updated = reduce(self.post, SetField("urgency", "critical"))
        self.assertIs(updated.urgency, Urgency.CRITICAL)

    def test_set_unknown_field(self):
        with self.assertRaises(KeyError):
            reduce(self.post, SetField("nickname", "x"))

    def test_add_item_seeds_blank_values(self):
        updated = reduce(self.post, AddItem("animals"))
        self.assertEqual(len(self.post.animals), 2)
        self.assertEqual(len(updated.animals), 3)
        new_animal = updated.animals[-1]
        self.assertEqual(new_animal.name, "")
        self.assertEqual(new_animal.photos, [""])
        self.assertTrue(new_animal.id)
        self.assertNotIn(new_animal.id, {a.id for a in self.post.animals})

    def test_add_item_with_values(self):
        updated = reduce(self.post, AddItem("animals", {"name": "Rex", "gender": "male"}))
        self.assertEqual(updated.animals[-1].name, "Rex")
        self.assertEqual(updated.animals[-1].gender.value, "male")

    def test_update_item_keeps_id(self):
        original_id = self.post.animals[0].id
        updated = reduce(self.post, UpdateItem("animals", 0, {"breed": "Beagle", "id": "other"}))
        self.assertEqual(updated.animals[0].breed, "Beagle")
        self.assertEqual(updated.animals[0].id, original_id)
        self.assertIsNone(self.post.animals[0].breed)
        # Untouched items are shared between versions
        self.assertIs(updated.animals[1], self.post.animals[1])

    def test_remove_item(self):
        updated = reduce(self.post, RemoveItem("animals", 0))
        self.assertEqual([a.name for a in updated.animals], ["Bella"])
        self.assertEqual(len(self.post.animals), 2)

    def test_move_first_item_up_is_noop(self):
        self.assertIs(reduce(self.post, MoveItem("animals", 0, "up")), self.post)
        self.assertIs(reduce(self.post, MoveItem("animals", 1, "down")), self.post)

    def test_move_item_down(self):
        updated = reduce(self.post, MoveItem("animals", 0, "down"))
        self.assertEqual([a.name for a in updated.animals], ["Bella", "Max"])
        self.assertEqual([a.name for a in self.post.animals], ["Max", "Bella"])

    def test_nested_list_values(self):
        post = reduce(self.post, AddListValue("photos", collection="animals", index=0))
        post = reduce(post, SetListValue("photos", 0, "max.jpg", collection="animals", index=0))
        post = reduce(post, AddListValue("photos", "max2.jpg", collection="animals", index=0))
        self.assertEqual(post.animals[0].photos, ["max.jpg", "max2.jpg"])

        post = reduce(post, RemoveListValue("photos", 0, collection="animals", index=0))
        self.assertEqual(post.animals[0].photos, ["max2.jpg"])
        self.assertEqual(self.post.animals[0].photos, [])

    def test_top_level_list_values(self):
        alert = BlacklistAlert(title="Alert")
        self.assertEqual(reduce(alert, AddListValue("hashtags", "x")).hashtags, ["x"])

    def test_hashtags(self):
        post = reduce(self.post, AddHashtag(" #Rescue "))
        self.assertEqual(post.hashtags, ["Rescue"])
        self.assertIs(reduce(post, AddHashtag("Rescue")), post)
        self.assertIs(reduce(post, AddHashtag("  # ")), post)

        post = reduce(post, AddHashtag("AdoptDontShop"))
        post = reduce(post, RemoveHashtag(0))
        self.assertEqual(post.hashtags, ["AdoptDontShop"])

    def test_specializations(self):
        post = RescuePost(title="Max", organizations=[RescueOrganization(name="Happy Paws")])
        post = reduce(post, AddSpecialization(0, " Senior dogs "))
        self.assertEqual(post.organizations[0].specializations, ["Senior dogs"])
        self.assertIs(reduce(post, AddSpecialization(0, "Senior dogs")), post)
        self.assertIs(reduce(post, AddSpecialization(0, "   ")), post)

        post = reduce(post, RemoveSpecialization(0, 0))
        self.assertEqual(post.organizations[0].specializations, [])

    def test_reset(self):
        other = RescuePost(title="Other")
        self.assertIs(reduce(self.post, Reset(other)), other)

    def test_unknown_action(self):
        with self.assertRaises(TypeError):
            reduce(self.post, object())


class TestFormController(unittest.IsolatedAsyncioTestCase):

    def test_default_posts(self):
        self.assertEqual(default_post("rescue").title, "")
        self.assertEqual(default_post("blacklist").case_title, "")
        self.assertEqual(default_post("alert").kind, "alert")

    def test_dispatch_and_undo(self):
        form = FormController()
        first = form.state
        form.dispatch(SetField("title", "Max"))
        self.assertEqual(form.version, 1)
        self.assertEqual(form.state.title, "Max")
        self.assertEqual(first.title, "")

        # No-op actions do not create a version
        form.dispatch(MoveItem("animals", 0, "up"))
        self.assertEqual(form.version, 1)

        form.undo()
        self.assertIs(form.state, first)

    def test_preview_matches_formatter(self):
        form = FormController(RescuePost(title="Max"))
        form.dispatch(AddItem("animals", {"name": "Max"}))
        self.assertEqual(form.preview(), format_post(form.state))
        self.assertIn("▼ Animal #1\nName: Max", form.preview())

    def test_preview_of_draft_with_free_text_deadline(self):
        form = FormController(kind="rescue")
        form.dispatch(SetField("title", "Max"))
        form.dispatch(SetField("deadline", "next friday"))
        self.assertIn("Deadline: next friday", form.preview())
        with self.assertRaises(RecordValidationError):
            form.validated()

    def test_preview_of_unnamed_individual_has_no_name_line(self):
        form = FormController(kind="blacklist")
        form.dispatch(SetField("case_title", "Fake shelter"))
        form.dispatch(AddItem("individuals", {"phone": "555-0100"}))
        text = form.preview()
        self.assertIn("▼ Individual #1\nPhone: 555-0100", text)
        self.assertNotIn("Name:", text)

        form = FormController(kind="alert")
        form.dispatch(SetField("title", "Hoarding"))
        form.dispatch(AddItem("individuals", {"role": "Owner"}))
        form.dispatch(AddItem("violations"))
        text = form.preview()
        self.assertIn("▼ Individual #1\nRole: Owner", text)
        self.assertIn("▼ Violation #1\nCategory: ", text)
        self.assertNotIn("Name:", text)
        self.assertNotIn("Details:", text)

    def test_incomplete_draft_fails_validation(self):
        form = FormController(kind="rescue")
        form.dispatch(SetField("title", "Max"))
        form.dispatch(AddItem("animals"))
        with self.assertRaises(RecordValidationError) as ctx:
            form.validated()
        self.assertEqual(ctx.exception.status_code, 422)
        self.assertTrue(any("name" in e["field"] for e in ctx.exception.errors))

    async def test_save_and_load_template(self):
        store = InMemoryTemplateStore()
        form = FormController(kind="alert")
        form.dispatch(SetField("title", "Puppy mill"))
        form.dispatch(SetField("severity", "high"))

        template = await form.save_as_template(store, "  Alerts  ")
        self.assertEqual(template.name, "Alerts")
        self.assertEqual(template.data.title, "Puppy mill")

        other = FormController()
        other.load_template(await store.get(template.id))
        self.assertEqual(other.state.kind, "alert")
        self.assertEqual(other.preview(), form.preview())

    async def test_blank_template_name_rejected(self):
        store = InMemoryTemplateStore()
        form = FormController(RescuePost(title="Max"))
        with self.assertRaises(RecordValidationError) as ctx:
            await form.save_as_template(store, "   ")
        self.assertEqual(ctx.exception.message, "Please enter a template name")
        self.assertEqual(await store.list(), [])


if __name__ == "__main__":
    unittest.main()
