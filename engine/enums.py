"""
Enumerations for Dependency Kinds, Node Types, Impact Levels and Cycle Severity

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import IMPACT_RATIO_CRITICAL, IMPACT_RATIO_HIGH, IMPACT_RATIO_MEDIUM


class DependencyKind(str, Enum):
    terraform_resource = "terraform_resource"
    docker_depends_on = "docker_depends_on"
    docker_network = "docker_network"
    k8s_service = "k8s_service"
    k8s_deployment = "k8s_deployment"
    k8s_configmap = "k8s_configmap"
    k8s_secret = "k8s_secret"
    npm_dependency = "npm_dependency"
    npm_dev_dependency = "npm_dev_dependency"
    codeowner = "codeowner"
    unknown = "unknown"

    @classmethod
    def coerce(cls, value: object) -> DependencyKind:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value in cls._value2member_map_:
                return cls(value)
            # camelCase spelling emitted by package manifest extractors
            if value == "npm_devDependency":
                return cls.npm_dev_dependency
        return cls.unknown


class NodeType(str, Enum):
    service = "service"
    database = "database"
    queue = "queue"
    api = "api"
    terraform_resource = "terraform_resource"
    docker_service = "docker_service"
    k8s_deployment = "k8s_deployment"
    k8s_service = "k8s_service"
    npm_package = "npm_package"
    team = "team"
    unknown = "unknown"


class ImpactLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @classmethod
    def from_ratio(cls, ratio: float) -> ImpactLevel:
        if ratio > IMPACT_RATIO_CRITICAL:
            return cls.critical
        if ratio > IMPACT_RATIO_HIGH:
            return cls.high
        if ratio > IMPACT_RATIO_MEDIUM:
            return cls.medium
        return cls.low


class CycleSeverity(str, Enum):
    warning = "warning"
    error = "error"


class SourceKind(str, Enum):
    local = "local"
    remote = "remote"
