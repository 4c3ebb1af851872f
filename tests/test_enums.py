"""
Test cases for enums used in the graph engine, including DependencyKind coercion and ImpactLevel banding.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import CycleSeverity, DependencyKind, ImpactLevel, NodeType, SourceKind


@pytest.mark.parametrize(
    "ratio, expected",
    [
        (0.0, ImpactLevel.low),
        (0.1, ImpactLevel.low),
        (0.11, ImpactLevel.medium),
        (0.25, ImpactLevel.medium),
        (0.26, ImpactLevel.high),
        (0.5, ImpactLevel.high),
        (0.51, ImpactLevel.critical),
        (1.0, ImpactLevel.critical),
    ],
)
def test_impact_level_bands_are_exclusive_below_inclusive_above(ratio, expected):
    assert ImpactLevel.from_ratio(ratio) == expected


def test_impact_bands_ignore_environment(monkeypatch):
    from config import Settings

    monkeypatch.setenv("DEPGRAPH_IMPACT_RATIO_CRITICAL", "0.9")
    assert not hasattr(Settings(), "impact_ratio_critical")
    assert ImpactLevel.from_ratio(0.6) == ImpactLevel.critical


def test_dependency_kind_coerce():
    assert DependencyKind.coerce("docker_network") == DependencyKind.docker_network
    assert DependencyKind.coerce(DependencyKind.codeowner) == DependencyKind.codeowner
    assert DependencyKind.coerce("npm_devDependency") == DependencyKind.npm_dev_dependency
    assert DependencyKind.coerce("helm_chart") == DependencyKind.unknown
    assert DependencyKind.coerce(None) == DependencyKind.unknown


def test_string_values():
    assert NodeType.k8s_service.value == "k8s_service"
    assert CycleSeverity.warning.value == "warning"
    assert SourceKind.remote.value == "remote"
