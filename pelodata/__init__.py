"""
Shared layer for the pelodata Lambda functions.

Deployed as a Lambda layer and imported by every function under lambdas/.
"""

__version__ = "0.1.0"
