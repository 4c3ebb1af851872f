"""
Exception types raised by the graph engine for contract violations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


class GraphError(Exception):
    pass


class GraphContractError(GraphError, TypeError):
    """Raised when a caller hands the engine an input of the wrong shape.

    Missing node ids and empty fact lists are not contract violations; those
    produce empty results instead.
    """
