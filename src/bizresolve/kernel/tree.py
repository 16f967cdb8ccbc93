"""Resource tree: physical containers, artifact definitions and the
logical resources resolved beneath them.

Every node is registered in one arena keyed by `ref_id`. Resources and
the source objects they represent refer to each other by id only
(`resource.source_ref` / `obj.resource_ref`), so the tree owns nothing
but its own nodes.
"""

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple, Union

logger = logging.getLogger(__name__)


class ResourceTreeError(Exception):
    """Base exception for resource tree invariant violations."""
    pass


class DuplicateResourceKeyError(ResourceTreeError):
    """Raised when a resource key is already present in the tree."""
    def __init__(self, key: str, kind: str):
        self.key = key
        self.kind = kind
        super().__init__(f"Resource key already in tree: {key} ({kind})")


class UnknownParentError(ResourceTreeError):
    """Raised when attaching beneath a ref_id that cannot own the node."""
    def __init__(self, parent_id: Optional[str], reason: str = "not found"):
        self.parent_id = parent_id
        super().__init__(f"Cannot attach beneath parent {parent_id!r}: {reason}")


class Linkable(Protocol):
    """A source object that can be linked to a resource."""
    object_id: str
    resource_ref: Optional[str]


@dataclass
class ResourceRelationship:
    """Cross-link from one resource to another (outside the ownership tree)."""
    ref_id: str
    kind: str  # "parent" | "child"


@dataclass
class Resource:
    """A logical, addressable unit produced by resolution."""
    key: str
    name: str
    kind: str
    description: str = ""
    ref_id: Optional[str] = None
    parent_ref_id: Optional[str] = None
    source_ref: Optional[str] = None  # object_id of the linked source object
    properties: Dict[str, str] = field(default_factory=dict)
    relationships: List[ResourceRelationship] = field(default_factory=list)
    resources: List["Resource"] = field(default_factory=list)


@dataclass
class ResourceDefinition:
    """One physical artifact payload inside a container."""
    key: str
    name: str
    kind: str
    content: Optional[str] = None  # raw payload text, if the artifact carries one
    ref_id: Optional[str] = None
    parent_ref_id: Optional[str] = None
    resources: List[Resource] = field(default_factory=list)


@dataclass
class ResourceContainer:
    """Physical grouping node (installer, archive or assembly)."""
    key: str
    name: str
    kind: str
    location: str = ""
    ref_id: Optional[str] = None
    parent_ref_id: Optional[str] = None
    containers: List["ResourceContainer"] = field(default_factory=list)
    definitions: List[ResourceDefinition] = field(default_factory=list)


TreeNode = Union[ResourceContainer, ResourceDefinition, Resource]


class ResourceTree:
    """Arena and key index over containers, definitions and resources."""

    def __init__(self):
        self.containers: List[ResourceContainer] = []
        self._ids = itertools.count(1)
        self._nodes: Dict[str, TreeNode] = {}
        self._definitions: Dict[Tuple[str, str], List[ResourceDefinition]] = defaultdict(list)
        self._resources: Dict[str, Resource] = {}
        self._sources: Dict[str, Any] = {}

    def _next_id(self) -> str:
        return f"ref-{next(self._ids)}"

    # Building

    def add_container(self, container: ResourceContainer, parent_id: Optional[str] = None) -> str:
        """Register a container (and anything already nested in it).

        Returns:
            The container's ref_id.
        """
        if parent_id is None:
            self.containers.append(container)
        else:
            parent = self._nodes.get(parent_id)
            if not isinstance(parent, ResourceContainer):
                raise UnknownParentError(parent_id, "not a container")
            parent.containers.append(container)
        self._register_container(container, parent_id)
        return container.ref_id

    def _register_container(self, container: ResourceContainer, parent_id: Optional[str]):
        container.ref_id = self._next_id()
        container.parent_ref_id = parent_id
        self._nodes[container.ref_id] = container
        for definition in container.definitions:
            self._register_definition(definition, container.ref_id)
        for child in container.containers:
            self._register_container(child, container.ref_id)

    def add_definition(self, container_id: str, definition: ResourceDefinition) -> str:
        """Add a definition to a registered container.

        Returns:
            The definition's ref_id.
        """
        container = self._nodes.get(container_id)
        if not isinstance(container, ResourceContainer):
            raise UnknownParentError(container_id, "not a container")
        container.definitions.append(definition)
        self._register_definition(definition, container_id)
        return definition.ref_id

    def _register_definition(self, definition: ResourceDefinition, container_id: str):
        definition.ref_id = self._next_id()
        definition.parent_ref_id = container_id
        self._nodes[definition.ref_id] = definition
        self._definitions[(definition.key, definition.kind)].append(definition)
        nested = list(definition.resources)
        definition.resources.clear()
        for resource in nested:
            self.attach(definition.ref_id, resource)

    def attach(self, parent_id: str, resource: Resource) -> str:
        """Attach a resource beneath a definition or another resource.

        Assigns a fresh ref_id, sets parent_ref_id and appends the
        resource to the parent's children. Child resources already set on
        `resource` are attached recursively. Every key in the subtree is
        checked before anything is registered, so a clash leaves the tree
        unchanged.

        Returns:
            The new ref_id.
        """
        parent = self._nodes.get(parent_id)
        if parent is None:
            raise UnknownParentError(parent_id)
        if isinstance(parent, ResourceContainer):
            raise UnknownParentError(parent_id, "containers hold definitions, not resources")

        seen = set()
        stack = [resource]
        while stack:
            node = stack.pop()
            if node.key in seen or self.has_resource_key(node.key):
                raise DuplicateResourceKeyError(node.key, node.kind)
            seen.add(node.key)
            stack.extend(node.resources)

        self._register_resource(parent, resource)
        return resource.ref_id

    def _register_resource(self, parent: Union[ResourceDefinition, Resource], resource: Resource):
        nested = list(resource.resources)
        resource.resources = []
        resource.ref_id = self._next_id()
        resource.parent_ref_id = parent.ref_id
        parent.resources.append(resource)
        self._nodes[resource.ref_id] = resource
        self._resources[resource.key] = resource
        logger.debug("attached %s (%s) under %s", resource.key, resource.kind, parent.ref_id)

        for child in nested:
            self._register_resource(resource, child)

    def link(self, resource: Resource, obj: Linkable):
        """Set the two-way link between a resource and its source object."""
        resource.source_ref = obj.object_id
        obj.resource_ref = resource.ref_id
        self._sources[obj.object_id] = obj

    def relate(self, parent: Resource, child: Resource):
        """Record a parent/child cross-link between two resources."""
        parent.relationships.append(ResourceRelationship(ref_id=child.ref_id, kind="child"))
        child.relationships.append(ResourceRelationship(ref_id=parent.ref_id, kind="parent"))

    # Lookup

    def get(self, ref_id: Optional[str]) -> Optional[TreeNode]:
        """Get any node by ref_id, or None."""
        if ref_id is None:
            return None
        return self._nodes.get(ref_id)

    def find_resource_definition(self, key: Optional[str], kind: str) -> Optional[ResourceDefinition]:
        """Find a definition by its (key, kind) pair, or None if absent."""
        if key is None:
            return None
        matches = self._definitions.get((key, kind))
        return matches[0] if matches else None

    def find_resource(self, key: Optional[str], kind: str) -> Optional[Resource]:
        """Find a resource by its (key, kind) pair, or None if absent."""
        if key is None:
            return None
        resource = self._resources.get(key)
        if resource is None or resource.kind != kind:
            return None
        return resource

    def find_resources_by_kind(self, kind: str) -> List[Resource]:
        """All resources of a kind, in tree order."""
        return [r for r in self.walk_resources() if r.kind == kind]

    def has_resource_key(self, key: str) -> bool:
        """True if any resource, of any kind, holds `key`."""
        return key in self._resources

    def source_of(self, resource: Resource) -> Optional[Any]:
        """The source object linked to a resource, or None."""
        if resource.source_ref is None:
            return None
        return self._sources.get(resource.source_ref)

    def resource_of(self, obj: Linkable) -> Optional[Resource]:
        """The resource linked to a source object, or None."""
        node = self.get(obj.resource_ref)
        return node if isinstance(node, Resource) else None

    def walk_resources(self) -> Iterator[Resource]:
        """Depth-first walk over every resource in the tree."""
        stack: List[Any] = list(reversed(self.containers))
        while stack:
            node = stack.pop()
            if isinstance(node, ResourceContainer):
                stack.extend(reversed(node.containers))
                stack.extend(reversed(node.definitions))
            else:
                if isinstance(node, Resource):
                    yield node
                stack.extend(reversed(node.resources))

    def resource_count(self) -> int:
        return len(self._resources)
