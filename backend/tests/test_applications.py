class TestApplications:
    def _create_job(self, client):
        r = client.post("/api/v1/jobs", json={
            "title": "Tint Installer",
            "company_name": "Shade Co",
            "company_email": "jobs@shade.example",
            "location_city": "Austin",
            "location_state": "TX",
            "trades": ["window tint"],
            "job_type": "part-time",
            "description": "Residential and automotive tint.",
        })
        data = r.json()
        return data["job"]["slug"], data["manage_token"]

    def _apply(self, client, slug, **overrides):
        payload = {
            "name": "Sam Rivera",
            "email": "Sam@Example.com",
            "message": "Five years of tint experience.",
        }
        payload.update(overrides)
        return client.post(f"/api/v1/jobs/{slug}/apply", json=payload)

    def test_apply_to_job(self, client):
        slug, _ = self._create_job(client)
        r = self._apply(client, slug, phone="555-0100")
        assert r.status_code == 201
        data = r.json()
        assert data["message"] == "Application submitted successfully"
        assert data["application"]["email"] == "sam@example.com"
        assert data["application"]["phone"] == "555-0100"

    def test_apply_to_missing_job(self, client):
        assert self._apply(client, "missing-job").status_code == 404

    def test_apply_requires_fields(self, client):
        slug, _ = self._create_job(client)
        assert self._apply(client, slug, message="").status_code == 422
        assert self._apply(client, slug, name="   ").status_code == 400

    def test_closed_job_rejects_applications(self, client):
        slug, token = self._create_job(client)
        client.put(f"/api/v1/jobs/{slug}", json={"status": "closed"}, headers={"X-Manage-Token": token})
        assert self._apply(client, slug).status_code == 409

    def test_list_applications_needs_manage_token(self, client):
        slug, token = self._create_job(client)
        self._apply(client, slug)
        self._apply(client, slug, name="Alex Kim", email="alex@example.com")

        assert client.get(f"/api/v1/jobs/{slug}/applications").status_code == 401
        assert client.get(
            f"/api/v1/jobs/{slug}/applications", headers={"X-Manage-Token": "bad"}
        ).status_code == 404

        r = client.get(f"/api/v1/jobs/{slug}/applications", headers={"X-Manage-Token": token})
        assert r.status_code == 200
        assert {a["name"] for a in r.json()} == {"Sam Rivera", "Alex Kim"}
