"""Flattening of an inference request into a single text prompt.

Layout sent to the model:

    <system prompt>

    Additional Knowledge Context:
    <knowledge context>

    Conversation History:
    Human: ...
    Assistant: ...

    Human: <message>
    Assistant:
"""

from .models import InferenceRequest

SPEAKER_LABELS = {"user": "Human", "assistant": "Assistant"}


def build_prompt(request: InferenceRequest) -> str:
    """Build the full prompt text for a request."""
    prompt = request.config.system_prompt

    if request.knowledge_context:
        prompt += f"\n\nAdditional Knowledge Context:\n{request.knowledge_context}"

    if request.conversation_history:
        prompt += "\n\nConversation History:"
        for entry in request.conversation_history:
            prompt += f"\n{SPEAKER_LABELS[entry.role]}: {entry.content}"

    prompt += f"\n\nHuman: {request.message}\nAssistant:"
    return prompt
