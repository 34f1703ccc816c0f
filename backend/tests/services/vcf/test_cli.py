import json

from genorisk.services.vcf.__main__ import main


class TestCli:

    def test_prints_results_as_json(self, tmp_path, capsys, poor_vcf):
        path = tmp_path / "patient.vcf"
        path.write_text(poor_vcf)

        code = main(["genorisk", str(path), "--drugs", "codeine", "--patient-id", "P9"])

        assert code == 0
        out = capsys.readouterr().out
        payload = json.loads(out[out.index("{\n"):])
        assert payload["is_valid"] is True
        assert payload["results"][0]["patient_id"] == "P9"
        assert payload["results"][0]["risk_assessment"]["risk_label"] == "Toxic"

    def test_unusable_file(self, tmp_path, capsys, header_only_vcf):
        path = tmp_path / "empty.vcf"
        path.write_text(header_only_vcf)

        assert main(["genorisk", str(path)]) == 1
        assert "VCF rejected" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        assert main(["genorisk", str(tmp_path / "nope.vcf")]) == 2

    def test_missing_option_value(self, tmp_path, poor_vcf):
        path = tmp_path / "patient.vcf"
        path.write_text(poor_vcf)
        assert main(["genorisk", str(path), "--drugs"]) == 2
