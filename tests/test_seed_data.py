"""Tests for the demo data script"""

from scripts.seed_data import DEMO_TEMPLATES, seed_data


class TestSeedData:
    """Tests for seeding demo data"""

    def test_seeds_templates_and_one_planner(self, run_db):
        async def scenario(repo):
            await repo.insert_template("Old item", "Income")
            saved = await seed_data(repo.session, month="2025-11")
            templates = await repo.get_all_templates()
            months = await repo.get_planner_months()
            return saved, [t.name for t in templates], months

        saved, names, months = run_db(scenario)
        assert saved == len([t for t in DEMO_TEMPLATES if t[2] > 0])
        assert sorted(names) == sorted(t[0] for t in DEMO_TEMPLATES)
        assert months == ["2025-11"]
