"""Tests for the dashboard page and its form actions."""

from stoneforged.web.database import insert_prospect


class TestDashboardPage:
    """Test page rendering."""

    def test_index_page(self, client):
        """Dashboard should load with stat cards and the add form."""
        response = client.get("/")
        assert response.status_code == 200
        assert "StoneForged-Intel" in response.text
        assert "TOTAL PROSPECTS" in response.text
        assert 'name="brand"' in response.text

    def test_empty_state(self, client):
        response = client.get("/")
        assert "No prospects yet" in response.text

    def test_no_matches_state(self, client, db_session):
        insert_prospect(db_session, brand="VitalSleep", score=9.2)
        response = client.get("/", params={"q": "zzz"})
        assert "No matches found" in response.text
        assert "VitalSleep" not in response.text.split("<tbody>")[1]

    def test_trigger_options_listed(self, client):
        response = client.get("/")
        assert "Reformulation / Ingredient change (+4 bonus)" in response.text
        assert 'data-score="9.0"' in response.text

    def test_stats_cover_all_rows_while_filtered(self, client):
        client.get("/api/seed")
        response = client.get("/", params={"q": "sleep"})
        assert '<div class="card-value" id="stat-total">3</div>' in response.text
        assert '<div class="card-value" id="stat-avg">9.2</div>' in response.text

    def test_sort_links_toggle(self, client):
        """The active ascending column links to its descending sort."""
        client.get("/api/seed")
        response = client.get("/", params={"sort": "score", "direction": "asc"})
        assert "/?sort=score&amp;direction=desc" in response.text
        assert "SCORE ↑" in response.text

    def test_sorted_rows(self, client):
        client.get("/api/seed")
        response = client.get("/", params={"sort": "brand", "direction": "asc"})
        body = response.text
        assert body.index("EnergyBoost") < body.index("PureRest") < body.index("VitalSleep")

    def test_unknown_sort_is_ignored(self, client):
        response = client.get("/", params={"sort": "website"})
        assert response.status_code == 200


class TestFormActions:
    """Test add, delete and seed forms."""

    def test_add_prospect(self, client):
        response = client.post("/prospects/add", data={
            "brand": "NightCalm",
            "trigger": "Reformulation",
            "score": "",
            "decision_maker": "Head of R&D",
            "next_action": "Send sample",
        }, follow_redirects=False)
        assert response.status_code == 303

        (row,) = client.get("/api/prospects").json()
        assert row["brand"] == "NightCalm"
        assert row["score"] == 9.0  # auto-scored from the trigger

    def test_add_with_score_override(self, client):
        client.post("/prospects/add", data={
            "brand": "NightCalm", "trigger": "Reformulation", "score": "6.5",
        })
        (row,) = client.get("/api/prospects").json()
        assert row["score"] == 6.5

    def test_add_custom_trigger(self, client):
        client.post("/prospects/add", data={
            "brand": "NightCalm", "trigger": "", "custom_trigger": "Trade show booth",
        })
        (row,) = client.get("/api/prospects").json()
        assert row["trigger"] == "Trade show booth"
        assert row["score"] == 5.0

    def test_score_field_starts_empty(self, client):
        """Without script the trigger still sets the score."""
        response = client.get("/")
        assert 'placeholder="Readiness Score (auto-set from trigger)" value=""' in response.text

    def test_unusable_score_keeps_trigger_score(self, client):
        client.post("/prospects/add", data={
            "brand": "NightCalm", "trigger": "Reformulation", "score": "abc",
        })
        (row,) = client.get("/api/prospects").json()
        assert row["score"] == 9.0

    def test_rejected_form_keeps_typed_values(self, client):
        """A blank brand re-render keeps the custom trigger and score."""
        response = client.post("/prospects/add", data={
            "brand": "", "trigger": "", "custom_trigger": "Trade show booth", "score": "7.5",
        })
        assert response.status_code == 400
        assert 'name="custom_trigger" placeholder="Other / Custom trigger" value="Trade show booth"' in response.text
        assert 'value="7.5"' in response.text

    def test_add_requires_brand(self, client):
        """Blank brand re-renders with a message and saves nothing."""
        response = client.post("/prospects/add", data={"brand": "  ", "trigger": "Funding round"})
        assert response.status_code == 400
        assert "Brand is required" in response.text
        assert client.get("/api/prospects").json() == []

    def test_add_keeps_view(self, client):
        response = client.post("/prospects/add", data={
            "brand": "A", "q": "sleep", "sort": "score", "direction": "desc",
        }, follow_redirects=False)
        assert response.headers["location"] == "/?q=sleep&sort=score&direction=desc"

    def test_delete(self, client, db_session):
        new_id = insert_prospect(db_session, brand="Gone", score=5.0)
        response = client.post(f"/prospects/{new_id}/delete", follow_redirects=False)
        assert response.status_code == 303
        assert client.get("/api/prospects").json() == []

    def test_delete_missing(self, client):
        response = client.post("/prospects/999/delete", follow_redirects=False)
        assert response.status_code == 303

    def test_seed(self, client):
        response = client.post("/seed")
        assert response.status_code == 200
        assert "PureRest" in response.text

    def test_seed_twice_says_nothing_new(self, client):
        client.post("/seed")
        response = client.post("/seed")
        assert response.status_code == 200
        assert "No new examples added" in response.text

    def test_seed_form_keeps_sort(self, client):
        response = client.get("/", params={"q": "e", "sort": "score", "direction": "desc"})
        seed_form = response.text.split('action="/seed"')[1].split("</form>")[0]
        assert 'name="sort" value="score"' in seed_form
        assert 'name="direction" value="desc"' in seed_form

    def test_seed_redirect_keeps_view(self, client):
        response = client.post("/seed", data={
            "q": "e", "sort": "score", "direction": "desc",
        }, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/?q=e&sort=score&direction=desc"


class TestExportDownload:
    """Test the dashboard CSV download."""

    def test_export_nothing(self, client):
        response = client.get("/export.csv")
        assert response.status_code == 404
        assert "No prospects to export" in response.text

    def test_export_view(self, client):
        client.get("/api/seed")
        response = client.get("/export.csv", params={"q": "energy"})
        assert response.status_code == 200
        assert "attachment; filename=stoneforged-prospects-" in response.headers["content-disposition"]
        lines = response.text.splitlines()
        assert len(lines) == 2
        assert lines[1].startswith('"EnergyBoost"')
