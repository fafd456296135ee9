# python
"""
Option descriptors behavioral tests.

Scope
- InstanceOptionDescriptor: forwarding, dynamic values for textual options only,
  ordering of base and dynamic values, identity guard on apply, ordering relation.
- StaticOptionDescriptor: metadata and static values taken from the option element.

Conventions
- Test method names follow CamelCase per project convention.
- RecordingDescriptor stands in for any base descriptor and records apply() calls.
"""
import unittest
from enum import Enum
from unittest import TestCase

from optionary import (
    OptionDescriptor,
    StaticOptionDescriptor,
    InstanceOptionDescriptor,
    OptionIdentityError,
    MalformedValuesProviderError,
    DuplicatedValuesProviderError,
    option,
    values,
)


class RecordingDescriptor(OptionDescriptor):
    def __init__(self, name, type=str, available=(), descr="recorded"):
        self._name = name
        self._type = type
        self._available = list(available)
        self._descr = descr
        self.applied = []

    @property
    def element(self):
        return ("element", self._name)

    @property
    def name(self):
        return self._name

    @property
    def type(self):
        return self._type

    @property
    def descr(self):
        return self._descr

    def available_values(self):
        return self._available

    def apply(self, target, values, /):
        self.applied.append((target, list(values)))

    def __lt__(self, other, /):
        return self.name < other.name


class Strategy(Enum):
    ROLLING = "rolling"
    RECREATE = "recreate"


class Bare:
    pass


class Regional:
    @values("region")
    def regions(self) -> list[str]:
        return ["a", "b"]


class Leveled:
    @values("level")
    def levels(self) -> list[int]:
        return [1, 2]


class Broken:
    @values("level")
    def levels(self, depth):
        return [depth]


class Conflicting:
    @values("level")
    def levels(self) -> list[int]:
        return [1]

    @values("level")
    def moreLevels(self) -> list[int]:
        return [2]


class Deploy:
    def __init__(self):
        self.strategy = None

    @option("strategy", descr="how instances are replaced")
    def setStrategy(self, strategy: Strategy):
        self.strategy = strategy

    @values("strategy")
    def strategies(self) -> list[str]:
        return ["canary"]


class TestInstanceOptionDescriptorValues(TestCase):
    """Available values computation."""

    def testTextualWithoutProviderEqualsBase(self):
        descriptor = InstanceOptionDescriptor(Bare(), RecordingDescriptor("region", available=["x", "y"]))
        self.assertEqual(descriptor.available_values(), ["x", "y"])

    def testTextualWithProviderAppendsAfterBase(self):
        descriptor = InstanceOptionDescriptor(Regional(), RecordingDescriptor("region", available=["x"]))
        self.assertEqual(descriptor.available_values(), ["x", "a", "b"])

    def testTextualWithProviderAndEmptyBase(self):
        descriptor = InstanceOptionDescriptor(Regional(), RecordingDescriptor("region"))
        self.assertEqual(descriptor.available_values(), ["a", "b"])

    def testStrSubclassIsTextual(self):
        class Name(str):
            pass

        descriptor = InstanceOptionDescriptor(Regional(), RecordingDescriptor("region", type=Name))
        self.assertEqual(descriptor.available_values(), ["a", "b"])

    def testNonTextualSkipsMatchingProvider(self):
        descriptor = InstanceOptionDescriptor(Leveled(), RecordingDescriptor("level", type=int, available=["1"]))
        self.assertEqual(descriptor.available_values(), ["1"])

    def testNonTextualNeverScans(self):
        descriptor = InstanceOptionDescriptor(Broken(), RecordingDescriptor("level", type=int))
        self.assertEqual(descriptor.available_values(), [])
        descriptor = InstanceOptionDescriptor(Conflicting(), RecordingDescriptor("level", type=int))
        self.assertEqual(descriptor.available_values(), [])

    def testTextualSurfacesMalformedProvider(self):
        descriptor = InstanceOptionDescriptor(Broken(), RecordingDescriptor("region"))
        with self.assertRaises(MalformedValuesProviderError):
            descriptor.available_values()

    def testTextualSurfacesDuplicatedProvider(self):
        descriptor = InstanceOptionDescriptor(Conflicting(), RecordingDescriptor("level"))
        with self.assertRaises(DuplicatedValuesProviderError) as context:
            descriptor.available_values()
        self.assertIn("'level'", str(context.exception))

    def testBaseValuesAreNotMutated(self):
        base = RecordingDescriptor("region", available=["x"])
        descriptor = InstanceOptionDescriptor(Regional(), base)
        descriptor.available_values()
        descriptor.available_values()
        self.assertEqual(base.available_values(), ["x"])

    def testRepeatedCallsAreStable(self):
        descriptor = InstanceOptionDescriptor(Regional(), RecordingDescriptor("region", available=["x"]))
        self.assertEqual(descriptor.available_values(), descriptor.available_values())


class TestInstanceOptionDescriptorForwarding(TestCase):
    """Metadata forwarding, apply and ordering."""

    def setUp(self):
        self.target = Bare()
        self.base = RecordingDescriptor("region", descr="where to deploy")
        self.descriptor = InstanceOptionDescriptor(self.target, self.base)

    def testMetadataIsForwarded(self):
        self.assertEqual(self.descriptor.name, "region")
        self.assertEqual(self.descriptor.descr, "where to deploy")
        self.assertIs(self.descriptor.type, str)
        self.assertEqual(self.descriptor.element, ("element", "region"))

    def testBindingIsExposed(self):
        self.assertIs(self.descriptor.target, self.target)
        self.assertIs(self.descriptor.delegate, self.base)

    def testApplyOnBoundTargetForwards(self):
        self.descriptor.apply(self.target, ["eu"])
        self.assertEqual(self.base.applied, [(self.target, ["eu"])])

    def testApplyOnOtherTargetFails(self):
        other = Bare()
        with self.assertRaises(OptionIdentityError) as context:
            self.descriptor.apply(other, ["eu"])
        self.assertIn(repr(other), str(context.exception))
        self.assertIn(repr(self.target), str(context.exception))
        self.assertEqual(self.base.applied, [])

    def testApplyRequiresIdentityNotEquality(self):
        class Equal:
            def __eq__(self, other):
                return True

            __hash__ = object.__hash__

        descriptor = InstanceOptionDescriptor(Equal(), RecordingDescriptor("region"))
        with self.assertRaises(OptionIdentityError):
            descriptor.apply(Equal(), ["eu"])

    def testOrderingFollowsDelegate(self):
        target = Bare()
        descriptors = [
            InstanceOptionDescriptor(target, RecordingDescriptor("zone")),
            InstanceOptionDescriptor(target, RecordingDescriptor("alpha")),
            InstanceOptionDescriptor(target, RecordingDescriptor("mode")),
        ]
        self.assertEqual([descriptor.name for descriptor in sorted(descriptors)], ["alpha", "mode", "zone"])

    def testTargetRequired(self):
        with self.assertRaises(TypeError):
            InstanceOptionDescriptor(None, RecordingDescriptor("region"))

    def testDelegateMustBeDescriptor(self):
        with self.assertRaises(TypeError):
            InstanceOptionDescriptor(Bare(), "region")

    def testContractIsAbstract(self):
        with self.assertRaises(TypeError):
            OptionDescriptor()


class TestStaticOptionDescriptor(TestCase):
    """Static descriptors built from option elements."""

    def setUp(self):
        self.descriptor = StaticOptionDescriptor(Deploy.setStrategy.__option__)

    def testMetadataFromElement(self):
        self.assertEqual(self.descriptor.name, "strategy")
        self.assertEqual(self.descriptor.descr, "how instances are replaced")
        self.assertIs(self.descriptor.type, Strategy)
        self.assertIs(self.descriptor.element, Deploy.setStrategy.__option__)

    def testEnumMembersAreStaticValues(self):
        self.assertEqual(self.descriptor.available_values(), ["ROLLING", "RECREATE"])

    def testEnumOptionIsNotAugmented(self):
        deploy = Deploy()
        descriptor = InstanceOptionDescriptor(deploy, self.descriptor)
        self.assertEqual(descriptor.available_values(), ["ROLLING", "RECREATE"])

    def testApplyConverts(self):
        deploy = Deploy()
        InstanceOptionDescriptor(deploy, self.descriptor).apply(deploy, ["recreate"])
        self.assertIs(deploy.strategy, Strategy.RECREATE)

    def testElementRequired(self):
        with self.assertRaises(TypeError):
            StaticOptionDescriptor("strategy")

    def testMixedOrdering(self):
        static = StaticOptionDescriptor(Deploy.setStrategy.__option__)
        recorded = RecordingDescriptor("alpha")
        self.assertLess(recorded, static)
        self.assertFalse(static < recorded)


if __name__ == "__main__":
    unittest.main()
