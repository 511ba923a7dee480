from margin_shorthand.core.io.load_declarations import load_declarations
from margin_shorthand.core.validate.validate_declarations import (
    summarize_declarations,
    validate_declarations,
)


def test_validate_happy_path():
    doc = load_declarations("examples/basic-margins.yaml")
    decls, errors = validate_declarations(doc)
    assert errors == []
    assert decls is not None
    assert [len(d.values) for d in decls] == [1, 2, 3, 4]
    assert decls[1].origin == "user"
    assert decls[3].important is True
    assert decls[0].property == "margin"


def test_validate_applies_defaults():
    doc = load_declarations("examples/basic-margins.yaml")
    decls, _ = validate_declarations(doc, default_origin="user-agent", default_important=True)
    assert decls is not None
    assert decls[0].origin == "user-agent"
    assert decls[0].important is True
    assert decls[1].origin == "user"


def test_validate_arity():
    doc = load_declarations("examples/invalid-arity.yaml")
    decls, errors = validate_declarations(doc)
    assert decls is None
    assert [e.code for e in errors] == ["E_INVALID_ARITY", "E_INVALID_ARITY"]
    assert errors[0].path == "declarations[0].values"


def test_validate_field_errors():
    doc = load_declarations("examples/invalid-fields.yaml")
    decls, errors = validate_declarations(doc)
    assert decls is None
    by_path = {e.path: e.code for e in errors}
    assert by_path == {
        "declarations[0].property": "E_UNSUPPORTED_PROPERTY",
        "declarations[1].origin": "E_INVALID_ENUM",
        "declarations[2].important": "E_INVALID_TYPE",
        "declarations[3].values": "E_INVALID_TYPE",
        "declarations[4].values": "E_REQUIRED_FIELD",
        "declarations[5]": "E_INVALID_TYPE",
    }


def test_validate_missing_declarations():
    decls, errors = validate_declarations({"declarations": None, "__file__": "x.yaml"})
    assert decls is None
    assert errors[0].code == "E_REQUIRED_FIELD"
    assert str(errors[0]).startswith("x.yaml:declarations:")


def test_summary_counts_arity():
    doc = load_declarations("examples/basic-margins.yaml")
    decls, _ = validate_declarations(doc)
    assert decls is not None
    assert summarize_declarations(decls) == "OK: 4 declarations (1-value=1, 2-value=1, 3-value=1, 4-value=1)"
