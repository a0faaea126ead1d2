"""Tests for the validation traversal engine."""

from __future__ import annotations

import pytest

from ryandata_object_validation import (
    LIMIT_EXCEEDED_CODE,
    TOO_MANY_ERRORS_CODE,
    AnnotationMetadataProvider,
    CompositeValidatorProvider,
    ConstraintValidatorProvider,
    InvocationContext,
    ObjectValidationError,
    ObjectValidator,
    SelfValidatingValidatorProvider,
    SuppressTypesValidatorProvider,
    ValidationOptions,
    ValidationStateDictionary,
    ValidationVisitor,
    ValidatorCache,
)
from ryandata_object_validation.validation.object_validator import default_visitor_factory
from tests.sample_models import (
    Account,
    Basket,
    Batch,
    Code,
    Customer,
    Envelope,
    Gauge,
    Inventory,
    Item,
    Measured,
    Node,
    Order,
    Period,
    Person,
    Secret,
    Shipment,
    SpecialItem,
    Ticket,
)


class Run:
    """Result of one validation call: sink, state and the visitor used."""

    def __init__(self, model, providers=None, state=None, prefix="", **options) -> None:
        self.visitors: list[ValidationVisitor] = []

        def factory(context, configuration, validation_state):
            visitor = default_visitor_factory(context, configuration, validation_state)
            self.visitors.append(visitor)
            return visitor

        validator = ObjectValidator(
            AnnotationMetadataProvider(),
            providers
            if providers is not None
            else [ConstraintValidatorProvider(), SelfValidatingValidatorProvider()],
            options=ValidationOptions(**{"max_depth": 32, "max_nodes": 10_000, **options}),
            visitor_factory=factory,
        )
        self.state = state if state is not None else ValidationStateDictionary()
        context = validator.create_context()
        validator.validate(context, self.state, prefix, model)
        self.errors = context.errors

    @property
    def visitor(self) -> ValidationVisitor:
        return self.visitors[0]


def limit_findings(errors) -> list[tuple[str, str]]:
    return [
        (key, error.message)
        for key in errors
        for error in errors.get_errors(key)
        if error.code == LIMIT_EXCEEDED_CODE
    ]


class TestFindings:
    """Rules produce findings at the right key paths."""

    def test_required_property_reported_at_property_key(self) -> None:
        run = Run(Person(name=None))
        assert run.errors.to_dict() == {"name": ["The name field is required."]}
        assert run.errors.get_errors("") == []

    def test_valid_model_has_no_findings(self) -> None:
        run = Run(Order(id="o-1", items=[Item("a"), Item("b")], tags=["new"]))
        assert run.errors.is_valid
        assert run.state.is_validated("")
        assert run.state.is_validated("items[1].quantity")

    def test_only_failing_element_reported(self) -> None:
        run = Run(Order(id="o-1", tags=["ok", "BAD", "fine"]))
        assert list(run.errors) == ["tags[1]"]
        assert run.errors.get_errors("tags[1]")[0].code == "pattern"

    def test_element_rule_reported_at_index_only(self) -> None:
        run = Run(Batch(items=["a", None, "c"]))
        assert run.errors.to_dict() == {"items[1]": ["The str field is required."]}
        assert run.errors.get_errors("items[0]") == []
        assert run.errors.get_errors("items[2]") == []

    def test_nested_object_in_collection(self) -> None:
        run = Run(Order(id="o-1", items=[Item("a"), Item(None), Item("c", quantity=0)]))
        assert run.errors.to_dict() == {
            "items[1].name": ["The name field is required."],
            "items[2].quantity": ["The field quantity must be between 1 and 100."],
        }

    def test_prefix_is_prepended(self) -> None:
        run = Run(Order(id=None, items=[Item(None)]), prefix="order")
        assert set(run.errors) == {"order.id", "order.items[0].name"}
        assert run.state.is_validated("order")

    def test_mapping_keys_used_in_paths(self) -> None:
        run = Run(Inventory(stock={"apple": Item("a"), "pear": Item(None)}))
        assert list(run.errors) == ["stock[pear].name"]

    def test_pydantic_model(self) -> None:
        run = Run(Customer(name=None, email="not-an-email"))
        assert set(run.errors) == {"name", "email"}
        assert run.errors.get_errors("email")[0].code == "pattern"

    def test_unhashable_annotation_extra_is_tolerated(self) -> None:
        assert Run(Measured()).errors.is_valid
        run = Run(Measured(weight=None))
        assert run.errors.to_dict() == {"weight": ["The weight field is required."]}

    def test_unhashable_pydantic_field_metadata_is_tolerated(self) -> None:
        run = Run(Gauge())
        assert list(run.errors) == ["reading"]
        assert Run(Gauge(reading=4)).errors.is_valid

    def test_plain_annotated_class(self) -> None:
        run = Run(Shipment(carrier=" ", weight=-1.0))
        assert run.errors.to_dict() == {
            "carrier": ["The carrier field is required."],
            "weight": ["The field weight must be greater than or equal to 0."],
        }

    def test_field_metadata_constraints(self) -> None:
        run = Run(Ticket())
        assert list(run.errors) == ["code"]

    def test_self_validating_model(self) -> None:
        run = Run(Period(start=5, end=1))
        assert run.errors.to_dict() == {"start": ["Start must not be after end."]}
        assert run.errors.get_errors("start")[0].code == "period"

    def test_self_validating_model_nested(self) -> None:
        run = Run(Envelope(payload=Period(start=2, end=1)), prefix="env")
        assert list(run.errors) == ["env.payload.start"]


class TestAggregation:
    """All rules of a node run unless stop_on_first_error is set."""

    def test_collects_all_rule_findings(self) -> None:
        run = Run(Code(value="ab"))
        assert [e.code for e in run.errors.get_errors("value")] == ["length", "pattern"]

    def test_stop_on_first_error(self) -> None:
        run = Run(Code(value="ab"), stop_on_first_error=True)
        assert [e.code for e in run.errors.get_errors("value")] == ["length"]

    def test_stop_on_first_error_still_visits_children(self) -> None:
        run = Run(Order(id=None, items=[Item(None)]), stop_on_first_error=True)
        assert set(run.errors) == {"id", "items[0].name"}

    def test_error_cap_records_single_too_many_errors(self) -> None:
        run = Run(Order(id="o", items=[Item(None) for _ in range(10)]), max_errors=3)
        assert run.errors.error_count == 3
        assert run.errors.has_reached_max_errors
        assert list(run.errors) == ["items[0].name", "items[1].name", ""]
        assert run.errors.get_errors("")[0].code == TOO_MANY_ERRORS_CODE

    def test_error_cap_leaves_unfinished_ancestors_unvalidated(self) -> None:
        state = ValidationStateDictionary()
        Run(Order(id="o", items=[Item(None) for _ in range(10)]), state=state, max_errors=3)
        assert state.is_validated("id")
        assert state.is_validated("items[0]")
        assert state.is_validated("items[1]")
        assert not state.is_validated("items[2].name")
        assert not state.is_validated("items[5]")
        assert not state.is_validated("items")
        assert not state.is_validated("")

    def test_state_reused_after_error_cap_revisits_the_rest(self) -> None:
        state = ValidationStateDictionary()
        order = Order(id="o", items=[Item(None) for _ in range(10)])
        Run(order, state=state, max_errors=3)
        run = Run(order, state=state, max_errors=100)
        assert list(run.errors) == [f"items[{index}].name" for index in range(2, 10)]
        assert state.is_validated("")


class TestCycles:
    """Cyclic and shared references terminate and are reported once per path."""

    def test_self_reference_terminates(self) -> None:
        node = Node(label="root")
        node.self_ref = node
        run = Run(node)
        assert run.errors.is_valid
        assert not run.visitor.limit_exceeded

    def test_self_reference_still_reports_node_findings(self) -> None:
        node = Node(label=None)
        node.self_ref = node
        run = Run(node)
        assert run.errors.to_dict() == {"label": ["The label field is required."]}

    def test_indirect_cycle_terminates(self) -> None:
        parent = Node(label="parent")
        child = Node(label=None, self_ref=parent)
        parent.children.append(child)
        run = Run(parent)
        assert list(run.errors) == ["children[0].label"]
        assert "children[0].self_ref" not in run.state

    def test_collection_containing_itself(self) -> None:
        node = Node(label="loop")
        node.children.append(node)
        run = Run(node)
        assert run.errors.is_valid

    def test_shared_object_reported_under_each_path(self) -> None:
        shared = Node(label=None)
        root = Node(label="root", children=[shared, shared])
        run = Run(root)
        assert run.errors.to_dict() == {
            "children[0].label": ["The label field is required."],
            "children[1].label": ["The label field is required."],
        }


class TestSuppression:
    """Suppressed types and properties are skipped; siblings are not."""

    def test_type_level_suppression_as_property(self) -> None:
        run = Run(Account(owner=None, secret=Secret(token=None)))
        assert run.errors.to_dict() == {"owner": ["The owner field is required."]}
        assert run.state.is_suppressed("secret")
        assert "secret.token" not in run.state

    def test_type_level_suppression_as_root(self) -> None:
        run = Run(Secret(token=None))
        assert run.errors.is_valid
        assert run.state.is_suppressed("")

    def test_suppressed_runtime_type_under_untyped_property(self) -> None:
        run = Run(Envelope(payload=Secret(token=None)))
        assert run.errors.is_valid
        assert run.state.is_suppressed("payload")

    def test_property_level_suppression_keeps_siblings(self) -> None:
        run = Run(
            Account(
                owner="ada",
                legacy=Item(None),
                archived=Item(None, quantity=0),
                notes="far too long for ten",
            )
        )
        assert list(run.errors) == ["notes"]
        assert run.state.is_suppressed("legacy")
        assert run.state.is_suppressed("archived")
        assert run.state.is_validated("notes")
        assert not run.state.is_suppressed("notes")

    def test_provider_suppression(self) -> None:
        providers = [ConstraintValidatorProvider(), SuppressTypesValidatorProvider([Item])]
        run = Run(Order(id=None, items=[Item(None), Item(None)]), providers=providers)
        assert list(run.errors) == ["id"]
        assert run.state.is_suppressed("items[0]")
        assert run.state.is_suppressed("items[1]")


class TestValidationState:
    """Pre-marked paths are skipped and visited paths are recorded."""

    def test_pre_marked_path_skipped(self) -> None:
        state = ValidationStateDictionary()
        state.mark_validated("items")
        run = Run(Order(id=None, items=[Item(None)]), state=state)
        assert list(run.errors) == ["id"]
        assert "items[0]" not in run.state

    def test_pre_marked_root_skips_everything(self) -> None:
        state = ValidationStateDictionary()
        state.mark_validated("")
        run = Run(Order(id=None), state=state)
        assert run.errors.is_valid
        assert run.visitor.visited_count == 0

    def test_each_node_visited_once(self) -> None:
        run = Run(Order(id="o", items=[Item("a"), Item("b")]))
        # root, id, items, 2 x (item, name, quantity), tags
        assert run.visitor.visited_count == 10
        assert len(run.state) == 10


class TestRuntimeTypes:
    """Runtime types decide shape and children; declared positions keep their rules."""

    def test_untyped_property_walks_runtime_object(self) -> None:
        run = Run(Envelope(payload=Item(None)))
        assert list(run.errors) == ["payload.name"]

    def test_subclass_properties_visited(self) -> None:
        run = Run(Basket(item=SpecialItem(name=None, discount=80)))
        assert set(run.errors) == {"item.name", "item.discount"}

    def test_untyped_collection_elements_use_runtime_metadata(self) -> None:
        run = Run(Envelope(payload=[Item("a"), Item(None)]))
        assert list(run.errors) == ["payload[1].name"]

    def test_none_elements_skipped_in_untyped_collection(self) -> None:
        run = Run(Envelope(payload=[None, Item(None)]))
        assert list(run.errors) == ["payload[1].name"]


class TestLimits:
    """Depth and node guards stop runaway traversals with a single finding."""

    @staticmethod
    def chain(length: int) -> Node:
        head = Node(label="n0")
        current = head
        for index in range(1, length):
            current.self_ref = Node(label=f"n{index}")
            current = current.self_ref
        return head

    def test_depth_limit(self) -> None:
        run = Run(self.chain(50), max_depth=10)
        expected_key = ".".join(["self_ref"] * 10 + ["label"])
        assert [key for key, _ in limit_findings(run.errors)] == [expected_key]
        assert run.visitor.limit_exceeded
        assert run.errors.limit_exceeded

    def test_depth_limit_leaves_ancestors_unvalidated(self) -> None:
        run = Run(self.chain(50), max_depth=10)
        assert not run.state.is_validated("")
        assert not run.state.is_validated("self_ref")
        assert run.state.is_validated("label")

    def test_depth_limit_aborts_only_the_subtree(self) -> None:
        root = Node(label="root", children=[self.chain(20), Node(label=None)])
        run = Run(root, max_depth=5)
        assert len(limit_findings(run.errors)) == 1
        assert run.errors.get_errors("children[1].label")[0].code == "required"

    def test_chain_within_depth_limit(self) -> None:
        run = Run(self.chain(5), max_depth=10)
        assert run.errors.is_valid
        assert not run.visitor.limit_exceeded

    def test_node_limit(self) -> None:
        order = Order(id="o", items=[Item(f"i{n}") for n in range(50)])
        run = Run(order, max_nodes=10)
        assert limit_findings(run.errors) == [
            ("items[2].name", "Validation stopped after visiting 10 nodes.")
        ]
        assert run.visitor.visited_count == 10
        assert run.visitor.limit_exceeded

    def test_findings_before_node_limit_kept(self) -> None:
        order = Order(id=None, items=[Item(None) for _ in range(50)])
        run = Run(order, max_nodes=6)
        assert run.errors.get_errors("id")[0].code == "required"
        assert run.errors.get_errors("items[0].name")[0].code == "required"
        assert len(limit_findings(run.errors)) == 1


class TestVisitorConstruction:
    def test_missing_arguments_raise(self) -> None:
        provider = CompositeValidatorProvider([])
        cache = ValidatorCache()
        metadata_provider = AnnotationMetadataProvider()
        with pytest.raises(ObjectValidationError) as exc_info:
            ValidationVisitor(InvocationContext(), None, cache, metadata_provider)  # type: ignore[arg-type]
        assert exc_info.value.context["argument"] == "validator_provider"
        with pytest.raises(ObjectValidationError):
            ValidationVisitor(None, provider, cache, metadata_provider)  # type: ignore[arg-type]

    def test_null_metadata_is_valid(self) -> None:
        visitor = ValidationVisitor(
            InvocationContext(),
            CompositeValidatorProvider([ConstraintValidatorProvider()]),
            ValidatorCache(),
            AnnotationMetadataProvider(),
        )
        assert visitor.validate(None, "", Person(name=None)) is True
        assert visitor.visited_count == 0

    def test_validate_returns_validity(self) -> None:
        metadata_provider = AnnotationMetadataProvider()
        visitor = ValidationVisitor(
            InvocationContext(),
            CompositeValidatorProvider([ConstraintValidatorProvider()]),
            ValidatorCache(),
            metadata_provider,
        )
        metadata = metadata_provider.get_metadata_for_type(Person)
        assert visitor.validate(metadata, "", Person(name=None)) is False
        assert visitor.errors.error_count == 1
