import json

from gpml2wprdf.config import BASE_IRI_ENV, ConversionConfig, WP_RDF_URL
from gpml2wprdf.convert_pathways import find_gpml_files, main

from pathway_factory import make_pathway


def test_convert_single_file_to_turtle(gpml_file, tmp_path):
    out = tmp_path / "out"
    assert main([str(gpml_file), str(out)]) == 0

    turtle = (out / "WP4846.ttl").read_text(encoding="utf-8")
    assert "<https://identifiers.org/wikipathways/WP4846_r20210601> a wp:Pathway" in turtle
    assert "wp:Catalysis" in turtle


def test_convert_directory_to_json(tmp_path, gpml_2021, gpml_2013a):
    src = tmp_path / "gpml"
    (src / "nested").mkdir(parents=True)
    (src / "WP1.gpml").write_text(gpml_2021, encoding="utf-8")
    (src / "nested" / "WP2.gpml").write_text(gpml_2013a, encoding="utf-8")
    out = tmp_path / "out"

    assert main([str(src), str(out), "--format", "json", "--domain", "https://rdf.example.org"]) == 0

    legacy = json.loads((out / "WP2.json").read_text(encoding="utf-8"))
    assert legacy["pathway"] == "https://identifiers.org/wikipathways/WP2_r1"
    assert legacy["interactions"][0]["iri"] == "https://rdf.example.org/Pathway/WP2_r1/WP/Interaction/i1"


def test_cli_options_override_pathway_metadata(gpml_file, tmp_path):
    out = tmp_path / "out"
    assert main([str(gpml_file), str(out), "--wp-id", "WP99", "--revision", "7", "--format", "json"]) == 0

    data = json.loads((out / "WP4846.json").read_text(encoding="utf-8"))
    assert data["pathway"] == "https://identifiers.org/wikipathways/WP99_r7"


def test_unparsable_file_gives_exit_code_1(tmp_path, capsys):
    bad = tmp_path / "broken.gpml"
    bad.write_text("<Pathway><oops></Pathway>", encoding="utf-8")

    assert main([str(bad), str(tmp_path / "out")]) == 1
    assert "Failed files: 1" in capsys.readouterr().out


def test_missing_input_gives_exit_code_1(tmp_path):
    assert main([str(tmp_path / "nothing"), str(tmp_path / "out")]) == 1


def test_find_gpml_files(tmp_path):
    (tmp_path / "x").mkdir()
    (tmp_path / "x" / "b.gpml").write_text("", encoding="utf-8")
    (tmp_path / "a.gpml").write_text("", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")

    assert [p.name for p in find_gpml_files(tmp_path)] == ["a.gpml", "b.gpml"]


def test_base_iri_from_environment(monkeypatch):
    monkeypatch.setenv(BASE_IRI_ENV, "https://mirror.example.org/")
    config = ConversionConfig.for_pathway(make_pathway())

    assert config.base_iri == "https://mirror.example.org"
    assert config.pathway_base == "https://mirror.example.org/Pathway/WP1_r1"


def test_pathway_id_precedence(monkeypatch):
    monkeypatch.delenv(BASE_IRI_ENV, raising=False)
    pathway = make_pathway()

    assert ConversionConfig.for_pathway(pathway).wp_id == "WP1"
    assert ConversionConfig.for_pathway(pathway, wp_id="WP5").wp_id == "WP5"
    pathway.xref = None
    assert ConversionConfig.for_pathway(pathway, file_name="dir/WP42_123.gpml").wp_id == "WP42"
    assert ConversionConfig.for_pathway(pathway).wp_id == "WP0"
    assert ConversionConfig.for_pathway(pathway).base_iri == WP_RDF_URL
