import pytest

from workdesk.roster.services import RosterProvider


@pytest.fixture
def roster_csv(tmp_path, settings):
    """Point the roster at a temporary CSV; returns a writer for its rows."""
    path = tmp_path / "users.csv"
    settings.ROSTER_PATH = str(path)

    def write(*rows: str, header="employeeId,name,department,team,position,password"):
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return RosterProvider(path)

    return write
