"""
HTTP tests for the genorisk API using FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from genorisk.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _upload(client, content, drugs="CODEINE,WARFARIN", filename="patient.vcf", **form):
    data = {"drugs": drugs, "explain": "false", **form}
    files = {"vcf": (filename, content.encode("utf-8"), "text/plain")}
    return client.post("/api/v1/analyze", data=data, files=files)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "genorisk"}


class TestAnalyze:

    def test_poor_metabolizer(self, client, poor_vcf):
        response = _upload(client, poor_vcf, patient_id="PATIENT_042")

        assert response.status_code == 200
        body = response.json()
        assert body["parse_errors"] == []
        assert [r["drug"] for r in body["results"]] == ["CODEINE", "WARFARIN"]
        first = body["results"][0]
        assert first["patient_id"] == "PATIENT_042"
        assert first["risk_assessment"]["risk_label"] == "Toxic"
        assert first["risk_assessment"]["severity"] == "critical"
        assert first["pharmacogenomic_profile"]["phenotype"] == "PM"
        assert first["pharmacogenomic_profile"]["detected_variants"][0]["zygosity"] == "homozygous"

    def test_default_patient_id_and_explanation(self, client, normal_vcf):
        response = _upload(client, normal_vcf, drugs="codeine", explain="true")

        result = response.json()["results"][0]
        assert result["patient_id"] == "PATIENT_001"
        assert result["llm_generated_explanation"]["summary"].startswith("Based on the patient's CYP2D6")

    def test_empty_drugs_means_all(self, client, normal_vcf):
        response = _upload(client, normal_vcf, drugs="")

        assert response.status_code == 200
        assert len(response.json()["results"]) == 6

    def test_blank_drug_list_rejected(self, client, normal_vcf):
        response = _upload(client, normal_vcf, drugs=" , ")
        assert response.status_code == 400

    def test_wrong_extension_rejected(self, client, normal_vcf):
        response = _upload(client, normal_vcf, filename="patient.txt")
        assert response.status_code == 400

    def test_unusable_file_rejected(self, client, header_only_vcf):
        response = _upload(client, header_only_vcf)

        assert response.status_code == 400
        assert "errors" in response.json()["detail"]

    def test_partial_file_reports_errors(self, client, poor_vcf):
        response = _upload(client, poor_vcf + "\nchr1\tbad\n", drugs="CODEINE")

        assert response.status_code == 200
        body = response.json()
        assert len(body["parse_errors"]) == 1
        assert body["results"][0]["quality_metrics"]["vcf_parsing_success"] is False


class TestExplain:

    def test_explain_assessments(self, client, poor_vcf):
        results = _upload(client, poor_vcf).json()["results"]
        response = client.post("/api/v1/explain", json={"assessments": results})

        assert response.status_code == 200
        explained = response.json()
        assert [r["drug"] for r in explained] == ["CODEINE", "WARFARIN"]
        assert explained[1]["llm_generated_explanation"]["summary"].startswith(
            "Based on the patient's CYP2C9 *3/*3"
        )
        assert explained[1]["risk_assessment"] == results[1]["risk_assessment"]

    def test_empty_assessments_rejected(self, client):
        response = client.post("/api/v1/explain", json={"assessments": []})
        assert response.status_code == 400


class TestReferenceEndpoints:

    def test_supported(self, client):
        body = client.get("/api/v1/pharmacogenomics/supported").json()

        assert "CYP2D6" in body["genes"]
        assert body["drug_gene_map"]["CLOPIDOGREL"] == "CYP2C19"

    def test_phenotype_lookup(self, client):
        response = client.get("/api/v1/pharmacogenomics/phenotype", params={"diplotype": "*1/*4"})
        assert response.json()["phenotype"] == "IM"

    def test_rules_for_drug(self, client):
        body = client.get("/api/v1/pharmacogenomics/rules/codeine").json()

        assert body["gene"] == "CYP2D6"
        assert body["rules"]["PM"]["risk"] == "Toxic"
        assert len(body["rules"]) == 5

    def test_rules_for_unsupported_drug(self, client):
        assert client.get("/api/v1/pharmacogenomics/rules/aspirin").status_code == 404

    def test_samples(self, client):
        listing = client.get("/api/v1/samples").json()
        assert {s["key"] for s in listing} == {"normal", "poor", "intermediate", "ultrarapid", "mixed"}
        assert "content" not in listing[0]

        sample = client.get("/api/v1/samples/poor").json()
        assert sample["content"].startswith("##fileformat=VCFv4.2")
        assert client.get("/api/v1/samples/nope").status_code == 404
