"""Building blocks shared by the Messaging and Workspaces contexts.

Holds the error taxonomy, identifiers, input validation, the execution
context and the domain-event envelope. Nothing here may import a bounded
context or infrastructure.
"""
