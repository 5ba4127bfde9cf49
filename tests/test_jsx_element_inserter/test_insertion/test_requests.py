"""Tests for insertion request and position types."""

import pytest

from jsx_element_inserter.insertion.requests import (
    INVALID_INDEX,
    Append,
    AtLogicalIndex,
    ElementDescription,
    InsertionRequest,
    Prepend,
    position_from_dict,
    position_to_dict,
)


class TestPositionSpecs:
    """Test position spec types and wire conversion."""

    def test_default_index_is_invalid_sentinel(self) -> None:
        """Test AtLogicalIndex defaults to the invalid sentinel."""
        spec = AtLogicalIndex()

        assert spec.index == INVALID_INDEX == -1
        assert spec.is_valid is False

    @pytest.mark.parametrize("index, valid", [
        (0, True),
        (3, True),
        (-1, False),
        (-5, False),
        (None, False),
        (True, False),
        ("1", False),
    ])
    def test_index_validity(self, index, valid: bool) -> None:
        """Test which index values are usable."""
        assert AtLogicalIndex(index=index).is_valid is valid

    def test_specs_are_value_objects(self) -> None:
        """Test position specs compare by value."""
        assert Append() == Append()
        assert Prepend() != Append()
        assert AtLogicalIndex(2) == AtLogicalIndex(index=2)

    @pytest.mark.parametrize("data, expected", [
        (None, Append()),
        ({}, Append()),
        ({"position": "append"}, Append()),
        ({"position": "PREPEND"}, Prepend()),
        ({"position": "index", "index": 2}, AtLogicalIndex(2)),
        ({"position": "index"}, AtLogicalIndex(INVALID_INDEX)),
    ])
    def test_position_from_dict(self, data, expected) -> None:
        """Test wire positions are converted to specs."""
        assert position_from_dict(data) == expected

    def test_position_from_dict_unknown(self) -> None:
        """Test unknown position names are rejected."""
        with pytest.raises(ValueError, match="Unknown insert position 'middle'"):
            position_from_dict({"position": "middle"})

    def test_position_to_dict(self) -> None:
        """Test specs convert to their wire form."""
        assert position_to_dict(Append()) == {"position": "append"}
        assert position_to_dict(Prepend()) == {"position": "prepend"}
        assert position_to_dict(AtLogicalIndex(1)) == {"position": "index", "index": 1}


class TestElementDescription:
    """Test ElementDescription functionality."""

    def test_description_copies_containers(self) -> None:
        """Test later changes to the caller's dict do not leak in."""
        attributes = {"className": "card"}
        description = ElementDescription("div", attributes=attributes)
        attributes["id"] = "late"

        assert description.attributes == {"className": "card"}
        assert description.children == ()

    def test_description_validation(self) -> None:
        """Test description value validation."""
        with pytest.raises(ValueError, match="Element tag name cannot be empty"):
            ElementDescription("")

        with pytest.raises(ValueError, match="Attribute names must be non-empty strings"):
            ElementDescription("div", attributes={"": "x"})

        with pytest.raises(TypeError, match="Nested children"):
            ElementDescription("div", children=({"tagName": "span"},))  # type: ignore[arg-type]

    def test_from_dict(self) -> None:
        """Test the camelCase wire form."""
        description = ElementDescription.from_dict({
            "tagName": "div",
            "attributes": {"className": "card", "tabIndex": 0},
            "textContent": "Hello",
            "children": [{"tagName": "img", "attributes": {"src": "a.png"}}],
        })

        assert description.tag_name == "div"
        assert description.attributes == {"className": "card", "tabIndex": 0}
        assert description.text_content == "Hello"
        assert description.children[0].tag_name == "img"
        assert description.children[0].text_content is None

    @pytest.mark.parametrize("text_content", [5, 1.5, True, ["a"], {"a": 1}])
    def test_text_content_must_be_string(self, text_content) -> None:
        """Test non-string text content from the wire form is rejected."""
        with pytest.raises(ValueError, match="Element text content must be a string"):
            ElementDescription.from_dict({"tagName": "p", "textContent": text_content})

    def test_text_content_may_be_empty_or_missing(self) -> None:
        """Test empty and missing text content are both accepted."""
        assert ElementDescription("p", text_content="").text_content == ""
        assert ElementDescription("p").text_content is None

    def test_from_dict_requires_tag_name(self) -> None:
        """Test tagName is required."""
        with pytest.raises(ValueError, match="requires 'tagName'"):
            ElementDescription.from_dict({"attributes": {}})

    def test_to_dict_round_trip(self) -> None:
        """Test the wire form survives a round trip."""
        data = {
            "tagName": "ul",
            "attributes": {},
            "children": [{"tagName": "li", "attributes": {}, "textContent": "a"}],
        }

        assert ElementDescription.from_dict(data).to_dict() == data


class TestInsertionRequest:
    """Test InsertionRequest functionality."""

    def test_default_position_is_append(self) -> None:
        """Test requests append by default."""
        request = InsertionRequest(code_block="<li />")

        assert request.position == Append()
        assert request.uses_code_block is True

    def test_request_needs_content(self) -> None:
        """Test an empty request is rejected."""
        with pytest.raises(ValueError, match="needs a code block or an element description"):
            InsertionRequest()

        with pytest.raises(ValueError):
            InsertionRequest(code_block="")

    def test_code_block_takes_precedence(self) -> None:
        """Test code blocks win over descriptions."""
        request = InsertionRequest(
            description=ElementDescription("div"), code_block="<span />"
        )

        assert request.uses_code_block is True

    def test_from_dict(self) -> None:
        """Test wire form with description and location."""
        request = InsertionRequest.from_dict({
            "tagName": "li",
            "textContent": "b",
            "location": {"position": "index", "index": 1},
        })

        assert request.description is not None
        assert request.description.tag_name == "li"
        assert request.code_block is None
        assert request.position == AtLogicalIndex(1)

    def test_from_dict_code_block(self) -> None:
        """Test wire form with a code block."""
        request = InsertionRequest.from_dict({
            "codeBlock": "<li>b</li>",
            "location": {"position": "prepend"},
        })

        assert request.description is None
        assert request.code_block == "<li>b</li>"
        assert request.position == Prepend()

    def test_to_dict(self) -> None:
        """Test request wire form."""
        request = InsertionRequest(
            description=ElementDescription("br"), position=AtLogicalIndex(0)
        )

        assert request.to_dict() == {
            "tagName": "br",
            "attributes": {},
            "location": {"position": "index", "index": 0},
        }
