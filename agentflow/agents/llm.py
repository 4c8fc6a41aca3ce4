import logging

from ..providers.base import USER, Message
from ..workflow.models import AgentNodeConfig
from .base import BaseAgent

logger = logging.getLogger(__name__)


class LLMAgent(BaseAgent):
    """ Agent that sends its combined input to the node's configured provider. """

    def execute(self, node_input, context):
        config = self.config if isinstance(self.config, AgentNodeConfig) else AgentNodeConfig.from_dict(self.config)
        provider = context.providers.get(config.provider)

        messages = [Message(role=USER, content=node_input)]
        options = {}
        if config.model is not None:
            options["model"] = config.model
        if config.temperature is not None:
            options["temperature"] = config.temperature
        if config.max_tokens is not None:
            options["max_tokens"] = config.max_tokens

        logger.info("Executing agent node: %s with %s", self.node.name or self.node_id, config.provider)
        response = provider.send_message(
            messages, config.system_prompt, cancel_token=context.cancel_token, **options
        )
        return response.content

    def dry_run(self, node_input, context):
        return f"{self.node_id}:DRY"
