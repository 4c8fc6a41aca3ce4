""" Exceptions raised while loading and running workflows. """


class WorkflowError(Exception):
    """ Base class for all workflow errors. """


class WorkflowValidationError(WorkflowError, ValueError):
    """ The workflow cannot be executed as defined (missing Input/Output node, bad node type). """


class WorkflowCycleError(WorkflowValidationError):
    def __init__(self, node_ids):
        self.node_ids = list(node_ids)
        super().__init__(f"Cycle detected in workflow graph involving nodes: {', '.join(self.node_ids)}")


class WorkflowFormatError(WorkflowError, ValueError):
    """ A workflow document could not be parsed into a workflow. """


class ProviderNotConfiguredError(WorkflowError, ValueError):
    def __init__(self, provider, reason: str = "is not configured"):
        self.provider = provider
        super().__init__(f"Provider {provider} {reason}")


class WorkflowCancelledError(WorkflowError):
    """ The run was stopped before it reached the Output node. """
