"""Shared fixtures: a diagnostics logger, a fresh context and a model builder."""

import logging

import pytest

from bizresolve.entities import MigrationModel, ParsedApplication, ParsedApplicationGroup
from bizresolve.kernel.constants import CONTAINER_MSI
from bizresolve.kernel.context import ParseContext
from bizresolve.kernel.tree import ResourceContainer, ResourceTree


@pytest.fixture
def diagnostics():
    """Logger handed to parsers; records reach caplog through propagation."""
    return logging.getLogger("bizresolve.tests")


@pytest.fixture
def context():
    return ParseContext()


@pytest.fixture
def make_model():
    """Build a model with one installer container holding `definitions`.

    `applications=None` leaves the model without parsed source data.
    """
    def _make(definitions=(), applications=None):
        tree = ResourceTree()
        container_id = tree.add_container(
            ResourceContainer(key="TestApp.msi", name="TestApp.msi", kind=CONTAINER_MSI)
        )
        for definition in definitions:
            tree.add_definition(container_id, definition)

        source = None
        if applications is not None:
            source = ParsedApplicationGroup(
                applications=[
                    ParsedApplication(resource_container_key="TestApp.msi", application=a)
                    for a in applications
                ]
            )
        return MigrationModel(tree=tree, source=source)

    return _make
