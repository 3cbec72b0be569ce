from app.config.reference_data import DEFAULT_OFFICERS
from app.models.complaint import ComplaintCategory, ComplaintStatus, Officer
from app.services.officer_assignment import OfficerAssignor, OfficerDirectory

WARD_OFFICER = Officer(id="OFF-W", name="Ward Officer", email="ward@example.org", ward="Ward A", division="Div-1", department="Water")
DIVISION_OFFICER = Officer(id="OFF-D", name="Division Officer", ward="Ward B", division="Div-2", department="Road")


def assignor(*officers):
    return OfficerAssignor(OfficerDirectory(officers))


def test_exact_ward_match():
    assignment = assignor(DIVISION_OFFICER, WARD_OFFICER).assign("Ward A", "Div-2", ComplaintCategory.GARBAGE)
    assert assignment.officer == WARD_OFFICER
    assert assignment.officer_id == "OFF-W"
    assert assignment.status == ComplaintStatus.IN_PROGRESS
    assert assignment.worker_name == "Ward Officer"
    assert assignment.department == "Water"


def test_division_fallback():
    assignment = assignor(WARD_OFFICER, DIVISION_OFFICER).assign("Ward Z", "Div-2", ComplaintCategory.GARBAGE)
    assert assignment.officer_id == "OFF-D"
    assert assignment.department == "Road"


def test_no_officer():
    assignment = assignor(WARD_OFFICER).assign("Ward Z", "Div-9", ComplaintCategory.STREETLIGHT)
    assert assignment.officer is None
    assert assignment.officer_id is None
    assert assignment.status == ComplaintStatus.SUBMITTED
    assert assignment.worker_name is None
    assert assignment.department == "Streetlight"


def test_empty_directory():
    assert assignor().assign("Ward A", "Div-1", ComplaintCategory.OTHER).officer is None


def test_default_directory_covers_every_zone():
    directory = OfficerDirectory(DEFAULT_OFFICERS)
    assert len(directory) == 4
    assert directory.find_by_division("Zone-3").name == "Suresh Jadhav"
    assert directory.find_by_ward("Amravati Ward – Old City Zone").id == "OFF-004"
