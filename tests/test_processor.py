from contextlib import contextmanager

from propbuilder.artifacts import DirectoryArtifactSink, MemoryArtifactSink
from propbuilder.declarations import BuilderProperty, ClassDecl, FieldDecl, MethodDecl
from propbuilder.descriptors import build_descriptor
from propbuilder.diagnostics import Kind, Messager
from propbuilder.emitter import UNRESOLVED_SETTER_MESSAGE
from propbuilder.processor import BuilderPropertyProcessor, group_by_owner, scan_marked_fields
from support import animal_decl, person_decl


class FailingSink(MemoryArtifactSink):
    """Memory sink that refuses to create the named artifacts."""

    def __init__(self, *failing: str) -> None:
        super().__init__()
        self._failing = set(failing)

    @contextmanager
    def create_source_file(self, qualified_name: str):
        if qualified_name in self._failing:
            raise PermissionError(f"read-only: {qualified_name}")
        with super().create_source_file(qualified_name) as out:
            yield out


def test_scanner_returns_only_marked_fields() -> None:
    cls = ClassDecl(
        "Person",
        [
            FieldDecl("name", "str", marker=BuilderProperty()),
            FieldDecl("nickname", "str"),
            MethodDecl("setName", ("str",), marker=BuilderProperty()),
        ],
    )
    assert scan_marked_fields([cls]) == [cls.fields[0]]


def test_grouping_preserves_first_occurrence_order() -> None:
    animal, person = animal_decl("zoo.Animal"), person_decl("people.Person")
    descriptors = [build_descriptor(f) for f in scan_marked_fields([animal, person])]

    groups = group_by_owner(descriptors)

    assert list(groups) == ["zoo.Animal", "people.Person"]
    assert [d.field_name for d in groups["zoo.Animal"]] == ["name", "canFly"]


def test_one_artifact_per_owning_class(sink, messager) -> None:
    processor = BuilderPropertyProcessor(artifacts=sink, messager=messager, target="java")

    result = processor.process([person_decl("people.Person"), animal_decl("zoo.Animal")])

    assert result.generated == ("people.PersonBuilder", "zoo.AnimalBuilder")
    assert result.failed == ()
    assert set(sink.files) == {"people.PersonBuilder", "zoo.AnimalBuilder"}
    assert "setCanFly" not in sink.files["people.PersonBuilder"]
    assert "setCanFly" in sink.files["zoo.AnimalBuilder"]
    assert "package zoo;" in sink.files["zoo.AnimalBuilder"]
    assert not messager.diagnostics


def test_classes_without_marked_fields_produce_nothing(sink, messager) -> None:
    plain = ClassDecl("Plain", [FieldDecl("x", "int"), MethodDecl("setX", ("int",))])

    result = BuilderPropertyProcessor(artifacts=sink, messager=messager).process([plain])

    assert result.generated == ()
    assert sink.files == {}


def test_repeated_passes_are_byte_identical(tmp_path) -> None:
    classes = [person_decl("people.Person"), animal_decl("zoo.Animal")]
    sink = DirectoryArtifactSink(tmp_path, ".java")
    processor = BuilderPropertyProcessor(artifacts=sink, messager=Messager())

    processor.process(classes)
    first = {p: p.read_bytes() for p in sorted(tmp_path.rglob("*.java"))}
    processor.process(classes)
    second = {p: p.read_bytes() for p in sorted(tmp_path.rglob("*.java"))}

    assert len(first) == 2
    assert first == second


def test_missing_setter_reports_one_error_and_keeps_builder(sink, messager) -> None:
    cls = ClassDecl(
        "Animal",
        [
            FieldDecl("name", "str", marker=BuilderProperty()),
            FieldDecl("x", "int", marker=BuilderProperty()),
            MethodDecl("setName", ("str",)),
        ],
    )

    result = BuilderPropertyProcessor(artifacts=sink, messager=messager, target="python").process([cls])

    assert result.generated == ("AnimalBuilder",)
    assert "def setX(" not in sink.files["AnimalBuilder"]
    assert "def setName(" in sink.files["AnimalBuilder"]
    assert [(d.kind, d.message, d.element) for d in messager.diagnostics] == [
        (Kind.ERROR, UNRESOLVED_SETTER_MESSAGE, cls.fields[1])
    ]


def test_mismatched_setter_type_is_not_a_match(sink, messager) -> None:
    cls = ClassDecl(
        "Person",
        [FieldDecl("name", "String", marker=BuilderProperty()), MethodDecl("setName", ("int",))],
    )

    BuilderPropertyProcessor(artifacts=sink, messager=messager).process([cls])

    assert "setName" not in sink.files["PersonBuilder"]
    assert len(messager.errors) == 1
    assert messager.errors[0].element is cls.fields[0]


def test_artifact_failure_is_isolated_per_class(messager) -> None:
    sink = FailingSink("people.PersonBuilder")
    processor = BuilderPropertyProcessor(artifacts=sink, messager=messager)

    result = processor.process([person_decl("people.Person"), animal_decl("zoo.Animal")])

    assert result.generated == ("zoo.AnimalBuilder",)
    assert result.failed == ("people.Person",)
    assert list(sink.files) == ["zoo.AnimalBuilder"]
    assert len(messager.errors) == 1
    error = messager.errors[0]
    assert error.element is None
    assert "people.Person" in error.message
    assert "read-only" in error.message


def test_directory_write_failure_is_reported(tmp_path, messager) -> None:
    # A directory squatting on the output path makes the open fail.
    (tmp_path / "people" / "PersonBuilder.java").mkdir(parents=True)
    sink = DirectoryArtifactSink(tmp_path, ".java")

    result = BuilderPropertyProcessor(artifacts=sink, messager=messager).process(
        [person_decl("people.Person"), animal_decl("zoo.Animal")]
    )

    assert result.failed == ("people.Person",)
    assert (tmp_path / "zoo" / "AnimalBuilder.java").is_file()
    assert messager.has_errors
