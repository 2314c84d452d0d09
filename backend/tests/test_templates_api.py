import unittest

from api_helpers import ApiTestCase

RESCUE = {
    "kind": "rescue",
    "title": "Max needs a home",
    "urgency": "high",
    "post_type": "foster",
    "animals": [{"name": "Max", "species": "Dog"}],
    "hashtags": ["FosterMax"],
}


class TestPostsApi(ApiTestCase):

    async def test_preview_alert(self):
        resp = await self.client.post(
            f"{self.api}/posts/preview",
            json={"kind": "alert", "title": "Test Alert", "severity": "critical", "status": "investigating"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["kind"], "alert")
        self.assertTrue(body["text"].startswith("🆘 CRITICAL WARNING: TEST ALERT 🆘"))

    async def test_preview_rescue(self):
        resp = await self.client.post(f"{self.api}/posts/preview", json=RESCUE)
        self.assertEqual(resp.status_code, 200)
        text = resp.json()["text"]
        self.assertIn("Type: Foster Needed", text)
        self.assertIn("▼ Animal #1\nName: Max\nSpecies: Dog", text)
        self.assertIn("#FosterMax", text)

    async def test_preview_rejects_invalid_record(self):
        resp = await self.client.post(
            f"{self.api}/posts/preview",
            json={"kind": "rescue", "title": "Max", "contact_persons": [{"name": "Sam", "email": "nope"}]},
        )
        self.assertEqual(resp.status_code, 422)
        body = resp.json()
        self.assertEqual(body["code"], "validation_error")
        self.assertTrue(any(e["field"].endswith("email") for e in body["errors"]))

    async def test_labels(self):
        resp = await self.client.get(f"{self.api}/posts/labels")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["post_type"]["foster"], {"emoji": "💝", "label": "Foster Needed"})


class TestTemplatesApi(ApiTestCase):

    async def _create(self, name="T1", data=None):
        resp = await self.client.post(f"{self.api}/templates", json={"name": name, "data": data or RESCUE})
        self.assertEqual(resp.status_code, 201)
        return resp.json()

    async def test_create_and_read(self):
        created = await self._create()
        self.assertEqual(created["id"], 1)
        self.assertEqual(created["created_at"], created["updated_at"])
        self.assertEqual(created["data"]["title"], "Max needs a home")
        self.assertTrue(created["data"]["animals"][0]["id"])

        resp = await self.client.get(f"{self.api}/templates/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), created)

    async def test_list(self):
        await self._create("first")
        await self._create("second", {"kind": "blacklist", "case_title": "Scam"})
        resp = await self.client.get(f"{self.api}/templates")
        self.assertEqual([t["name"] for t in resp.json()], ["first", "second"])
        self.assertEqual(resp.json()[1]["data"]["kind"], "blacklist")

    async def test_rename(self):
        created = await self._create()
        resp = await self.client.put(f"{self.api}/templates/{created['id']}", json={"name": "T2"})
        self.assertEqual(resp.status_code, 200)
        updated = resp.json()
        self.assertEqual(updated["name"], "T2")
        self.assertEqual(updated["data"], created["data"])
        self.assertNotEqual(updated["updated_at"], created["updated_at"])

    async def test_delete(self):
        created = await self._create()
        resp = await self.client.delete(f"{self.api}/templates/{created['id']}")
        self.assertEqual(resp.status_code, 204)
        resp = await self.client.get(f"{self.api}/templates/{created['id']}")
        self.assertEqual(resp.status_code, 404)

    async def test_delete_missing_is_not_found(self):
        resp = await self.client.delete(f"{self.api}/templates/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"code": "not_found", "detail": "Template not found"})

    async def test_malformed_id(self):
        resp = await self.client.get(f"{self.api}/templates/abc")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "invalid_id")

    async def test_blank_name_rejected(self):
        resp = await self.client.post(f"{self.api}/templates", json={"name": "", "data": RESCUE})
        self.assertEqual(resp.status_code, 422)
        self.assertIn("name", [e["field"] for e in resp.json()["errors"]])

    async def test_health(self):
        resp = await self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")


if __name__ == "__main__":
    unittest.main()
