from gpml2wprdf.build_functions.build_interactions import reconcile_interaction_type
from gpml2wprdf.data_structure.resolved_structure import InteractionKind, ParticipantShape
from gpml2wprdf.data_structure.wiki_data_structure import ArrowHeadType, GroupType
from gpml2wprdf.errors import DropReason

from pathway_factory import (
    CATALYSIS, CONFIG, DIRECTED, INHIBITION, convert, group, interaction_iri, iris, label,
    line, make_pathway, node, node_iri
)


# --- type reconciliation ---

def test_reconcile_all_undirected():
    lines = [line("L1", "A", "B"), line("L2", "C", "a1")]
    assert reconcile_interaction_type(lines) is ArrowHeadType.UNDIRECTED


def test_reconcile_single_arrow_head():
    lines = [line("L1", "A", "B", end_arrow=DIRECTED), line("L2", "C", "a1", start_arrow=DIRECTED)]
    assert reconcile_interaction_type(lines) is ArrowHeadType.DIRECTED


def test_reconcile_conflicting_arrow_heads_is_ambiguous():
    lines = [line("L1", "A", "B", end_arrow=DIRECTED), line("L2", "C", "a1", start_arrow=CATALYSIS)]
    assert reconcile_interaction_type(lines) is None


def test_ambiguous_merge_is_dropped():
    l1 = line("L1", start="A", end="B", end_arrow=DIRECTED, anchors=["a1"])
    l2 = line("L2", start="C", end="a1", start_arrow=CATALYSIS)
    result = convert(make_pathway(nodes=[node(n) for n in "ABC"], lines=[l1, l2]))

    assert result.interactions == []
    assert result.unsupported == []
    assert result.report.dropped_ids(DropReason.AMBIGUOUS_INTERACTION_TYPE) == ["L1"]


# --- classification ---

def test_directed_line_from_a_to_b():
    l1 = line("L", start="A", end="B", end_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node("A"), node("B")], lines=[l1]))

    [interaction] = result.interactions
    assert interaction.kind is InteractionKind.DIRECTED
    assert iris(interaction.sources) == [node_iri("A")]
    assert iris(interaction.targets) == [node_iri("B")]
    assert interaction.others == ()
    assert interaction.iri == interaction_iri("L")


def test_all_undirected_puts_everyone_in_others():
    l1 = line("L1", start="A", end="B", anchors=["a1"])
    l2 = line("L2", start="C", end="a1")
    result = convert(make_pathway(nodes=[node(n) for n in "ABC"], lines=[l1, l2]))

    [interaction] = result.interactions
    assert interaction.kind is InteractionKind.UNDIRECTED
    assert interaction.sources == ()
    assert interaction.targets == ()
    assert iris(interaction.others) == [node_iri("A"), node_iri("B"), node_iri("C")]


def test_catalysis_kind():
    l1 = line("L", start="E", end="S", end_arrow=CATALYSIS)
    result = convert(make_pathway(nodes=[node("E"), node("S")], lines=[l1]))

    [interaction] = result.interactions
    assert interaction.kind is InteractionKind.CATALYSIS
    assert interaction.arrowHead is CATALYSIS


def test_branch_joining_directed_line_is_a_source():
    l1 = line("L1", start="A", end="B", end_arrow=DIRECTED, anchors=["a1"])
    l2 = line("L2", start="C", end="a1")
    result = convert(make_pathway(nodes=[node(n) for n in "ABC"], lines=[l1, l2]))

    [interaction] = result.interactions
    assert iris(interaction.sources) == [node_iri("A"), node_iri("C")]
    assert iris(interaction.targets) == [node_iri("B")]


def test_arrow_head_at_start_makes_start_element_the_target():
    # Roles follow the arrowhead of each endpoint itself, not the start
    # arrowhead of the line. Confirm with curators before changing.
    l1 = line("L", start="A", end="B", start_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node("A"), node("B")], lines=[l1]))

    [interaction] = result.interactions
    assert iris(interaction.sources) == [node_iri("B")]
    assert iris(interaction.targets) == [node_iri("A")]


def test_both_ends_arrow_headed_are_both_targets():
    # Same per-endpoint rule: no source remains when both ends carry an arrowhead.
    l1 = line("L", start="A", end="B", start_arrow=DIRECTED, end_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node("A"), node("B")], lines=[l1]))

    [interaction] = result.interactions
    assert interaction.sources == ()
    assert iris(interaction.targets) == [node_iri("A"), node_iri("B")]


def test_both_ends_undirected_in_directed_merge_are_both_sources():
    l1 = line("L1", start="A", end="B", anchors=["a1"])
    l2 = line("L2", start="C", end="a1", start_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node(n) for n in "ABC"], lines=[l1, l2]))

    [interaction] = result.interactions
    assert interaction.kind is InteractionKind.DIRECTED
    assert iris(interaction.sources) == [node_iri("A"), node_iri("B")]
    assert iris(interaction.targets) == [node_iri("C")]


def test_duplicate_participants_are_suppressed():
    a1 = node("A1", identifier="7157")
    a2 = node("A2", identifier="7157")
    l1 = line("L1", start="A1", end="B", anchors=["x"])
    l2 = line("L2", start="A2", end="x")
    result = convert(make_pathway(nodes=[a1, a2, node("B")], lines=[l1, l2]))

    [interaction] = result.interactions
    assert iris(interaction.others) == [node_iri("7157"), node_iri("B")]


def test_dangling_endpoint_of_merged_line_is_dropped_not_the_interaction():
    l1 = line("L1", start="A", end="B", end_arrow=DIRECTED, anchors=["a1"])
    l2 = line("L2", start="ghost", end="a1")
    result = convert(make_pathway(nodes=[node("A"), node("B")], lines=[l1, l2]))

    [interaction] = result.interactions
    assert iris(interaction.sources) == [node_iri("A")]
    assert result.report.dropped_ids(DropReason.DANGLING_REFERENCE) == ["L2"]


def test_node_without_identity_is_skipped_with_warning():
    l1 = line("L", start="A", end="B", end_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node("A", xref=False), node("B")], lines=[l1]))

    [interaction] = result.interactions
    assert interaction.sources == ()
    assert iris(interaction.targets) == [node_iri("B")]
    assert any("'A' has no identity" in w for w in result.report.warnings)


def test_label_reference_is_skipped_with_warning():
    l1 = line("L", start="note1", end="B", end_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node("B")], lines=[l1], labels=[label("note1")]))

    [interaction] = result.interactions
    assert interaction.sources == ()
    assert any("Label 'note1'" in w for w in result.report.warnings)


# --- participant shapes ---

def test_group_participant_next_to_node():
    l1 = line("L", start="A", end="G", end_arrow=DIRECTED)
    result = convert(make_pathway(nodes=[node("A")], lines=[l1], groups=[group("G", GroupType.GROUP)]))

    [interaction] = result.interactions
    [target] = interaction.targets
    assert target.shape is ParticipantShape.GROUP
    assert target.iri == f"{CONFIG.pathway_base}/Group/G"


def test_only_groups_is_unsupported_shape():
    l1 = line("L", start="G1", end="G2", end_arrow=DIRECTED)
    groups = [group("G1", GroupType.GROUP), group("G2", GroupType.GROUP)]
    result = convert(make_pathway(lines=[l1], groups=groups))

    assert result.interactions == []
    assert result.report.dropped_ids(DropReason.UNSUPPORTED_PARTICIPANT_SHAPE) == ["L"]


def test_line_without_resolvable_nodes_is_unsupported_shape():
    l1 = line("L", start="A", end="B")
    result = convert(make_pathway(nodes=[node("A", xref=False), node("B", xref=False)], lines=[l1]))

    assert result.interactions == []
    assert result.report.dropped_ids(DropReason.UNSUPPORTED_PARTICIPANT_SHAPE) == ["L"]


def test_other_arrow_heads_give_unsupported_kind():
    l1 = line("L", start="A", end="B", end_arrow=INHIBITION)
    result = convert(make_pathway(nodes=[node("A"), node("B")], lines=[l1]))

    assert result.interactions == []
    [unsupported] = result.unsupported
    assert unsupported.kind is InteractionKind.UNSUPPORTED
    assert unsupported.arrowHead is INHIBITION
    assert result.report.dropped_ids(DropReason.UNSUPPORTED_ARROWHEAD) == ["L"]
