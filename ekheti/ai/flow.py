"""
The Flow abstraction: a named prompt template plus the schema its reply must match.
"""
import logging

from jinja2 import Environment
from pydantic import ValidationError

from ekheti.ai import gemini
from ekheti.errors import FlowError

logger = logging.getLogger(__name__)

_templates = Environment(trim_blocks=True, lstrip_blocks=True)


def _strip_code_fence(text):
    text = text.strip()
    if text.startswith('```'):
        text = text.split('\n', 1)[1] if '\n' in text else ''
        if text.rstrip().endswith('```'):
            text = text.rstrip()[:-3]
    return text.strip()


class Flow:
    def __init__(self, name, template, output_schema):
        self.name = name
        self.template = _templates.from_string(template)
        self.output_schema = output_schema

    def render(self, **context):
        return self.template.render(**context).strip()

    def __call__(self, media=(), **context):
        """Render the prompt, call the model and validate its JSON reply."""
        logger.info("Running flow %s", self.name)
        contents = [self.render(**context)]
        contents.extend(media)

        text = gemini.generate(contents)
        try:
            return self.output_schema.model_validate_json(_strip_code_fence(text or ''))
        except ValidationError as e:
            logger.error("Flow %s returned an invalid response: %s", self.name, e)
            raise FlowError(f"The model returned an unexpected response for {self.name}.")
