"""Tests for the resource facades wired through build_service."""

import json

import pytest
import requests

from duos_client.apis.dataset_api import NAME_NOT_FOUND
from duos_client.errors import ApiHttpError
from duos_client.services import build_service

from conftest import API, TDR


@pytest.fixture
def service(settings, navigator, transports):
    session, binary_session = transports
    service = build_service(settings, navigator=navigator, session=session, binary_session=binary_session)
    service.sign_in("token-1")
    yield service
    service.close()


def test_validate_name_maps_not_found_to_sentinel(service, adapter):
    adapter.add("GET", f"{API}/api/dataset/validate", status=404)

    assert service.datasets.validate_name("cohort") == NAME_NOT_FOUND
    assert adapter.requests[0].url == f"{API}/api/dataset/validate?name=cohort"


def test_validate_name_returns_existing_id(service, adapter):
    adapter.add("GET", f"{API}/api/dataset/validate", json_body=42)

    assert service.datasets.validate_name("cohort") == 42


def test_validate_name_treats_transport_failure_as_not_found(service, adapter):
    adapter.add("GET", f"{API}/api/dataset/validate", exc=requests.Timeout("slow"))

    assert service.datasets.validate_name("cohort") == NAME_NOT_FOUND
    assert service.busy.count == 0


def test_dataset_download_takes_file_name_from_disposition(service, adapter):
    adapter.add(
        "POST",
        f"{API}/api/dataset/download",
        json_body={"datasets": "id\tname\n1\tcohort"},
        headers={"Content-Disposition": 'attachment; filename="datasets.tsv"'},
    )

    file_name, content = service.datasets.download(["obj-1"])

    assert file_name == "datasets.tsv"
    assert content == b"id\tname\n1\tcohort"
    assert json.loads(adapter.requests[0].body) == ["obj-1"]


def test_dataset_download_rejects_non_object_body(service, adapter):
    adapter.add("POST", f"{API}/api/dataset/download", json_body=["id", "name"])

    with pytest.raises(TypeError):
        service.datasets.download(["obj-1"], file_name="datasets.tsv")

    assert service.busy.count == 0


def test_dataset_get_by_ids_repeats_query_parameter(service, adapter):
    adapter.add("GET", f"{API}/api/dataset/batch", json_body=[])

    service.datasets.get_by_ids([1, 2])

    assert adapter.requests[0].url == f"{API}/api/dataset/batch?ids=1&ids=2"


def test_ontology_search_skips_request_for_no_ids(service, adapter):
    assert service.ontology.search_ids([]) == []
    assert adapter.requests == []


def test_ontology_search_returns_empty_on_error_status(service, adapter):
    adapter.add("GET", "https://ontology.test/search", status=500)

    assert service.ontology.search_ids(["DOID_4", "DOID_5"]) == []
    assert adapter.requests[0].url == "https://ontology.test/search?id=DOID_4%2CDOID_5"


def test_user_update_strips_server_managed_fields(service, adapter):
    adapter.add("PUT", f"{API}/api/user/7", json_body={"userId": 7})
    user = {"updatedUser": {"displayName": "R", "createDate": 1, "institution": {}, "libraryCards": []}}

    assert service.users.update(user, 7) == {"userId": 7}
    assert json.loads(adapter.requests[0].body) == {"updatedUser": {"displayName": "R"}}
    assert "createDate" in user["updatedUser"]


def test_user_create_returns_false_on_error(service, adapter):
    adapter.add("POST", f"{API}/api/dacuser", status=409)

    assert service.users.create({"email": "a@b.test"}) is False


def test_accept_acknowledgements_without_keys_skips_request(service, adapter):
    assert service.users.accept_acknowledgements() == {}
    assert adapter.requests == []


def test_dar_post_filters_server_fields(service, adapter):
    adapter.add("POST", f"{API}/api/dar/v2", json_body={"referenceId": "r1"})

    service.dars.post({"projectTitle": "p", "createDate": 1, "sortDate": 2, "data_access_request_id": 3})

    assert json.loads(adapter.requests[0].body) == {"projectTitle": "p"}


def test_dar_upload_skips_empty_file(service, adapter):
    assert service.dars.upload_document("irb.pdf", b"", "dar-1", "irbCollaborationLetter") is None
    assert adapter.requests == []


def test_dar_upload_sends_multipart(service, adapter):
    adapter.add("POST", f"{API}/api/dar/v2/dar-1/irb", json_body={"ok": True})

    assert service.dars.upload_document("irb.pdf", b"%PDF", "dar-1", "irb") == {"ok": True}
    assert adapter.requests[0].headers["Content-Type"].startswith("multipart/form-data")
    assert adapter.requests[0].headers["Authorization"] == "Bearer token-1"


def test_support_requests_are_unauthenticated(service, adapter):
    adapter.add("POST", "https://support.test/api/v2/uploads", json_body={"upload": {"token": "t1"}})
    adapter.add("POST", "https://support.test/api/v2/requests.json", status=201)

    upload = service.support.upload_attachment(b"log")
    ticket = service.support.build_ticket("Rae", "bug", "rae@x.test", "Broken", "It broke", [upload["token"]], "/home")
    status = service.support.create_request(ticket)

    assert status == 201
    assert all("Authorization" not in request.headers for request in adapter.requests)
    assert ticket["request"]["comment"]["body"].endswith("Submitted from: /home")


def test_match_deduplicates_purpose_ids(service, adapter):
    adapter.add("GET", f"{API}/api/match/purpose/batch", json_body=[])

    service.match.find_batch(["a", "b", "a"])

    assert adapter.requests[0].url == f"{API}/api/match/purpose/batch?purposeIds=a%2Cb"


def test_terra_snapshots_pass_identifiers(service, adapter):
    url = f"{TDR}/api/repository/v1/snapshots"
    adapter.add("GET", url, json_body={"items": []})

    service.terra_data_repo.list_snapshots(["DUOS-000001", "DUOS-000002"])

    assert adapter.requests[0].url == f"{url}?duosDatasetIds=DUOS-000001&duosDatasetIds=DUOS-000002"


def test_dac_delete_returns_status(service, adapter):
    adapter.add("DELETE", f"{API}/api/dac/3", status=200)

    assert service.dacs.delete(3) == 200


def test_facade_401_ends_session(service, adapter, navigator):
    adapter.add("GET", f"{API}/api/institutions", status=401)

    with pytest.raises(ApiHttpError):
        service.institutions.list()

    assert service.session_state().is_valid is False
    assert navigator.redirects == ["/home?redirectTo=/datasets/catalog"]


def test_tos_text_is_plain(service, adapter):
    adapter.add("GET", f"{API}/tos/text/duos", content=b"Terms", headers={"Content-Type": "text/plain"})

    assert service.tos.duos_text() == "Terms"
    assert adapter.requests[0].headers["Accept"] == "text/plain"


def test_sign_out_clears_credential(service):
    service.sign_out()

    state = service.session_state()
    assert state.credential is None
    assert state.is_valid is False
