"""
API tests for the job, document and settings routers.
"""

import pytest
from fastapi.testclient import TestClient

from blinds_app.config import settings
from blinds_app.infrastructure.pdf.template_manager import TemplateManager
from blinds_app.infrastructure.repositories.job_repository import InMemoryJobRepository
from blinds_app.infrastructure.web.dependencies import (
    get_job_repository,
    get_pdf_service,
    get_template_manager,
)
from blinds_app.main import app

API = settings.api_prefix


class FakePDFService:
    def __init__(self, output_dir):
        self.output_dir = output_dir

    def render_pdf(self, document):
        return b"%PDF-1.4 fake"

    def generate_document_pdf(self, document, output_path=None):
        target = self.output_dir / document.filename
        target.write_bytes(self.render_pdf(document))
        return str(target)


@pytest.fixture
def client(tmp_path):
    repository = InMemoryJobRepository.from_file(settings.jobs_fixture_path)
    manager = TemplateManager(config_dir=tmp_path / "config")

    app.dependency_overrides[get_job_repository] = lambda: repository
    app.dependency_overrides[get_template_manager] = lambda: manager
    app.dependency_overrides[get_pdf_service] = lambda: FakePDFService(tmp_path)

    yield TestClient(app)

    app.dependency_overrides.clear()


class TestJobsRouter:
    """Test cases for job endpoints."""

    def test_health(self, client):
        response = client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_jobs(self, client):
        response = client.get(f"{API}/jobs")

        assert response.status_code == 200
        assert [job["id"] for job in response.json()] == ["AAB0001", "AAB0002", "AAB0003", "AAB0004", "AAB0005"]

    def test_list_jobs_by_status(self, client):
        response = client.get(f"{API}/jobs", params={"status": "cancelled"})

        assert [job["id"] for job in response.json()] == ["AAB0002"]

    def test_get_job(self, client):
        response = client.get(f"{API}/jobs/AAB0001")

        data = response.json()
        assert response.status_code == 200
        assert data["name"] == "Smith Residence"
        assert data["roller_blinds"][0]["line_total"] == pytest.approx(491.0)

    def test_unknown_job(self, client):
        response = client.get(f"{API}/jobs/AAB9999")

        assert response.status_code == 404
        assert response.json()["code"] == "ENTITY_NOT_FOUND"

    def test_cost_breakdown(self, client):
        response = client.get(f"{API}/jobs/AAB0001/costs")

        data = response.json()
        assert response.status_code == 200
        assert data["job_id"] == "AAB0001"
        assert data["subtotal"] == pytest.approx(1593.25)
        assert data["additional_flat"] == pytest.approx(90.0)
        assert data["vat_amount"] == pytest.approx(336.65)
        assert data["profit_amount"] == pytest.approx(420.8125)
        assert data["grand_total"] == pytest.approx(2440.7125)

    def test_cost_breakdown_without_configuration(self, client):
        response = client.get(f"{API}/jobs/AAB0005/costs")

        assert response.status_code == 422
        assert response.json()["field"] == "cost_summary"

    def test_update_costs(self, client):
        response = client.put(f"{API}/jobs/AAB0004/costs", json={
            "carriage": 30,
            "vat_rate": 20,
            "additional_costs": [{"description": "Parking", "amount": 10}],
        })

        assert response.status_code == 200
        assert response.json()["grand_total"] == pytest.approx(48.0)
        assert client.get(f"{API}/jobs/AAB0004").json()["cost_summary"]["total"] == pytest.approx(48.0)

    def test_update_costs_rejects_out_of_range_rate(self, client):
        response = client.put(f"{API}/jobs/AAB0001/costs", json={"vat_rate": 150})

        assert response.status_code == 422

    def test_add_blind(self, client):
        response = client.post(f"{API}/jobs/AAB0001/blinds/roller", json={
            "location": "Kitchen", "width": 800, "drop": 1000, "quantity": 2, "cost": 99.5
        })

        assert response.status_code == 201
        assert response.json()["id"] == "RB002"
        assert response.json()["line_total"] == pytest.approx(199.0)

    def test_add_blind_rejects_infinite_cost(self, client):
        response = client.post(
            f"{API}/jobs/AAB0001/blinds/roller",
            content='{"location": "Kitchen", "width": 800, "drop": 1000, "cost": 1e999}',
            headers={"content-type": "application/json"}
        )

        assert response.status_code == 422
        blinds = client.get(f"{API}/jobs/AAB0001").json()["roller_blinds"]
        assert [blind["id"] for blind in blinds] == ["RB001"]
        assert client.get(f"{API}/jobs/AAB0001/documents/quote").status_code == 200

    def test_update_costs_rejects_infinite_carriage(self, client):
        response = client.put(
            f"{API}/jobs/AAB0001/costs",
            content='{"carriage": 1e999, "vat_rate": 20}',
            headers={"content-type": "application/json"}
        )

        assert response.status_code == 422
        assert client.get(f"{API}/jobs/AAB0001/costs").json()["grand_total"] == pytest.approx(2440.7125)

    def test_unreadable_record_is_left_out_of_listing(self, client):
        records = [
            {"id": "AAB0001", "name": "Smith Residence", "status": "active"},
            {"id": "AAB0099", "name": "Broken Job", "status": "archived"},
        ]
        app.dependency_overrides[get_job_repository] = lambda: InMemoryJobRepository(records)

        listing = client.get(f"{API}/jobs")
        broken = client.get(f"{API}/jobs/AAB0099")

        assert listing.status_code == 200
        assert [job["id"] for job in listing.json()] == ["AAB0001"]
        assert broken.status_code == 422
        assert broken.json()["field"] == "status"

    def test_add_blind_to_cancelled_job(self, client):
        response = client.post(f"{API}/jobs/AAB0002/blinds/roller", json={
            "location": "Kitchen", "width": 800, "drop": 1000
        })

        assert response.status_code == 409
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"

    def test_duplicate_and_remove_blind(self, client):
        duplicate = client.post(f"{API}/jobs/AAB0001/blinds/vertical/VB001/duplicate")
        removed = client.delete(f"{API}/jobs/AAB0001/blinds/vertical/VB001")

        assert duplicate.json()["id"] == "VB002"
        assert removed.status_code == 204
        blinds = client.get(f"{API}/jobs/AAB0001").json()["vertical_blinds"]
        assert [blind["id"] for blind in blinds] == ["VB002"]

    def test_tasks(self, client):
        created = client.post(f"{API}/jobs/AAB0004/tasks", json={"description": "Fitting", "cost": 60})
        updated = client.put(f"{API}/jobs/AAB0004/tasks/TASK001", json={"description": "Fitting", "cost": 80})
        removed = client.delete(f"{API}/jobs/AAB0004/tasks/TASK001")

        assert created.status_code == 201
        assert created.json()["id"] == "TASK001"
        assert updated.json()["cost"] == 80
        assert removed.status_code == 204
        assert client.delete(f"{API}/jobs/AAB0004/tasks/TASK001").status_code == 404


class TestDocumentsRouter:
    """Test cases for document endpoints."""

    def test_quote(self, client):
        response = client.get(f"{API}/jobs/AAB0001/documents/quote", params={"on": "2025-04-20"})

        data = response.json()
        assert response.status_code == 200
        assert data["title"] == "QUOTATION"
        assert data["document_date"] == "2025-04-20"
        assert data["meta_lines"][1] == "Quote Reference: AAB0001"

    def test_invoice(self, client):
        response = client.get(f"{API}/jobs/AAB0001/documents/invoice", params={"on": "2025-04-20"})

        data = response.json()
        assert data["reference"] == "INV-AAB0001"
        assert data["due_date"] == "2025-05-20"
        keys = [section["key"] for page in data["pages"] for section in page["sections"]]
        assert keys[-1] == "payment_details"

    def test_financial_document_without_costs(self, client):
        response = client.get(f"{API}/jobs/AAB0005/documents/quote")

        assert response.status_code == 422
        assert response.json()["code"] == "DOCUMENT_COMPOSITION_FAILED"
        assert response.json()["job_id"] == "AAB0005"

    def test_envelope(self, client):
        response = client.get(f"{API}/jobs/AAB0004/documents/envelope")

        data = response.json()
        assert data["page_format"]["name"] == "A5"
        recipient = data["pages"][0]["sections"][1]
        assert recipient["key"] == "recipient"
        assert recipient["lines"] == ["Clarke Residence", "7 Orchard Lane", "Hilltop", "PQ12 3RS"]

    def test_unknown_kind(self, client):
        assert client.get(f"{API}/jobs/AAB0001/documents/letter").status_code == 422

    def test_pdf_download(self, client):
        response = client.get(f"{API}/jobs/AAB0001/documents/invoice/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="invoice-aab0001.pdf"'
        assert response.content == b"%PDF-1.4 fake"


    def test_pdf_file(self, client, tmp_path):
        response = client.post(f"{API}/jobs/AAB0001/documents/receipt/pdf", params={"on": "2025-04-20"})

        data = response.json()
        assert response.status_code == 201
        assert data["filename"] == "receipt-aab0001.pdf"
        assert data["kind"] == "receipt"
        assert data["file_size"] == len(b"%PDF-1.4 fake")
        assert (tmp_path / "receipt-aab0001.pdf").exists()


class TestSettingsRouter:
    """Test cases for company profile endpoints."""

    def test_get_default_profile(self, client):
        response = client.get(f"{API}/settings/company")

        assert response.status_code == 200
        assert response.json()["name"] == "All About Blinds"
        assert response.json()["has_logo"] is False

    def test_update_profile(self, client):
        response = client.put(f"{API}/settings/company", json={
            "name": "Blinds & Co",
            "email": "hello@blinds.example",
            "logo": "data:image/png;base64,iVBORw0KGgo=",
        })

        assert response.status_code == 200
        assert response.json()["has_logo"] is True

        invoice = client.get(f"{API}/jobs/AAB0001/documents/invoice").json()
        assert invoice["branding"] == {"company_name": "Blinds & Co", "has_logo": True}
        assert invoice["footer"] == "Blinds & Co | hello@blinds.example"

    def test_update_profile_rejects_bad_email(self, client):
        response = client.put(f"{API}/settings/company", json={"name": "Blinds & Co", "email": "nope"})

        assert response.status_code == 422
