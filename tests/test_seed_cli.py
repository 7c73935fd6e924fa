"""
Tests for the seeding script: printed summary and exit codes.
"""

import seed_database
from rural_properties.config import Settings
from rural_properties.services.seeding import SeedReport


def completed_report(**overrides) -> SeedReport:
    values = {
        "properties": 8,
        "users": 4,
        "agents": 3,
        "inquiries": 2,
        "reviews": 3,
        "saved_searches": 2,
        "system_settings": True,
    }
    values.update(overrides)
    return SeedReport(**values)


def use_report(monkeypatch, report: SeedReport) -> None:
    async def fake_seed() -> SeedReport:
        return report

    monkeypatch.setattr(seed_database, "seed", fake_seed)


class TestSeedScript:

    def test_success_prints_counts_and_exits_zero(self, monkeypatch, capsys):
        use_report(monkeypatch, completed_report())

        assert seed_database.main() == 0

        out = capsys.readouterr().out
        assert "Properties:      8" in out
        assert "Agents:          3" in out
        assert "Saved searches:  2" in out
        assert "Database seeded successfully" in out

    def test_collection_errors_are_listed(self, monkeypatch, capsys):
        use_report(monkeypatch, completed_report(reviews=0, errors=["Reviews: write rejected"]))

        assert seed_database.main() == 0

        out = capsys.readouterr().out
        assert "1 error(s)" in out
        assert "- Reviews: write rejected" in out
        assert "Database seeded successfully" not in out

    def test_uncaught_failure_exits_one(self, monkeypatch, capsys):
        async def broken_seed() -> SeedReport:
            raise RuntimeError("store unreachable")

        monkeypatch.setattr(seed_database, "seed", broken_seed)

        assert seed_database.main() == 1
        assert "Seeding failed: store unreachable" in capsys.readouterr().out

    def test_missing_project_id_exits_one(self, monkeypatch, capsys):
        unconfigured = Settings(
            _env_file=None,
            project_id=None,
            database_url="sqlite+aiosqlite:///:memory:",
            jwt_secret_key="a-sufficiently-long-secret-key-for-tests-0123",
            environment="production",
        )
        monkeypatch.setattr(seed_database, "settings", unconfigured)

        assert seed_database.main() == 1
        assert "Missing required configuration: PROJECT_ID" in capsys.readouterr().out
