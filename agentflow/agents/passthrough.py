from .base import BaseAgent


class InputAgent(BaseAgent):
    """ Produces the run's seed message; never recomputed from upstream nodes. """
    def execute(self, node_input, context):
        return context.input_message


class OutputAgent(BaseAgent):
    """ Passes its combined input through unchanged. """
    def execute(self, node_input, context):
        return node_input
