import pytest


GPML_2021 = """<?xml version="1.0" encoding="UTF-8"?>
<Pathway xmlns="http://pathvisio.org/GPML/2021" title="p53 signalling" organism="Homo sapiens" version="20210601">
  <Xref identifier="WP4846" dataSource="WikiPathways"/>
  <Description>A small test pathway</Description>
  <Graphics boardWidth="800" boardHeight="600"/>
  <DataNodes>
    <DataNode elementId="tp53" textLabel="TP53" type="GeneProduct">
      <Xref identifier="7157" dataSource="ncbigene"/>
      <States>
        <State elementId="st1" textLabel="P"/>
      </States>
      <Graphics centerX="100" centerY="100" width="80" height="20"/>
    </DataNode>
    <DataNode elementId="mdm2" textLabel="MDM2" type="GeneProduct" groupRef="cx1">
      <Xref identifier="4193" dataSource="Entrez Gene"/>
    </DataNode>
    <DataNode elementId="cdkn1a" textLabel="CDKN1A" type="GeneProduct" groupRef="cx1">
      <Xref identifier="1026" dataSource="ncbigene"/>
    </DataNode>
    <DataNode elementId="atp" textLabel="ATP" type="Metabolite">
      <Xref identifier="15422" dataSource="chebi"/>
    </DataNode>
  </DataNodes>
  <Interactions>
    <Interaction elementId="i1">
      <Waypoints>
        <Point elementId="i1p1" x="100" y="110" elementRef="tp53"/>
        <Point elementId="i1p2" x="300" y="110" elementRef="mdm2" arrowHead="Directed"/>
        <Anchor elementId="an1" position="0.5" shapeType="Circle"/>
      </Waypoints>
      <Graphics lineColor="000000"/>
    </Interaction>
    <Interaction elementId="i2">
      <Waypoints>
        <Point elementId="i2p1" x="200" y="200" elementRef="atp"/>
        <Point elementId="i2p2" x="200" y="110" elementRef="an1" arrowHead="Catalysis"/>
      </Waypoints>
    </Interaction>
  </Interactions>
  <Groups>
    <Group elementId="cx1" type="Complex" textLabel="MDM2:p21"/>
  </Groups>
</Pathway>
"""

GPML_2013A = """<?xml version="1.0" encoding="UTF-8"?>
<Pathway xmlns="http://pathvisio.org/GPML/2013a" Name="Legacy pathway" Organism="Mus musculus">
  <Comment Source="WikiPathways-description">Drawn with an old PathVisio</Comment>
  <DataNode TextLabel="A" GraphId="a" Type="GeneProduct" GroupRef="grp1">
    <Graphics CenterX="1" CenterY="1" Width="1" Height="1"/>
    <Xref Database="Entrez Gene" ID="11"/>
  </DataNode>
  <DataNode TextLabel="B" GraphId="b" Type="Protein" GroupRef="grp1">
    <Graphics CenterX="2" CenterY="2" Width="1" Height="1"/>
    <Xref Database="Uniprot-TrEMBL" ID="P12345"/>
  </DataNode>
  <DataNode TextLabel="C" GraphId="c" Type="Rna">
    <Xref Database="Entrez Gene" ID="13"/>
  </DataNode>
  <State GraphRef="a" TextLabel="P" GraphId="st1"/>
  <Interaction GraphId="i1">
    <Graphics ZOrder="12288" LineThickness="1.0">
      <Point X="1" Y="1" GraphRef="a" RelX="1.0" RelY="0.0"/>
      <Point X="2" Y="2" GraphRef="c" RelX="-1.0" RelY="0.0" ArrowHead="Arrow"/>
      <Anchor Position="0.5" Shape="None" GraphId="an1"/>
    </Graphics>
    <Xref Database="" ID=""/>
  </Interaction>
  <Interaction GraphId="i2">
    <Graphics ZOrder="12288" LineThickness="1.0">
      <Point X="0" Y="0" GraphRef="b"/>
      <Point X="1" Y="1" GraphRef="an1" ArrowHead="mim-catalysis"/>
    </Graphics>
    <Xref Database="" ID=""/>
  </Interaction>
  <Group GroupId="grp1" GraphId="g1" Style="Complex"/>
</Pathway>
"""


@pytest.fixture
def gpml_2021():
    return GPML_2021


@pytest.fixture
def gpml_2013a():
    return GPML_2013A


@pytest.fixture
def gpml_file(tmp_path):
    path = tmp_path / "WP4846.gpml"
    path.write_text(GPML_2021, encoding="utf-8")
    return path
