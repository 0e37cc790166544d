"""Provider factory functions for CLI.

Centralizes creation of the registry, LLM provider and inference endpoint
from environment variables. Library code receives the results explicitly.
"""

import os
from typing import Any

import typer
from rich.console import Console

from ..config import EndpointSettings
from ..inference import InferenceEndpoint, create_inference_endpoint
from ..llm import LLMProvider, create_llm_provider
from ..registry import ModelProfile, ModelRegistry, create_model_registry

_console = Console()

LLM_ENV = {
    "openai": ("OPENAI_API_KEY", "OPENAI_CHAT_MODEL"),
    "deepseek": ("DEEPSEEK_API_KEY", "DEEPSEEK_MODEL"),
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL"),
}


def get_registry(console: Console | None = None) -> ModelRegistry:
    """Create the model registry.

    Environment variables:
        MODELMART_CATALOG: Path to a YAML catalogue (default: bundled personas)
    """
    con = console or _console
    path = os.getenv("MODELMART_CATALOG")
    try:
        return create_model_registry("yaml", path=path)
    except (OSError, ValueError) as e:
        con.print(f"[red]Error: could not load model catalogue: {e}[/red]")
        raise typer.Exit(code=1)


def require_profile(registry: ModelRegistry, model_id: str, console: Console | None = None) -> ModelProfile:
    """Look up a profile, exiting with a helpful message when it is unknown."""
    con = console or _console
    profile = registry.get(model_id)
    if profile is None:
        known = ", ".join(p.id for p in registry.list_models()) or "none"
        con.print(f"[red]Error: unknown model '{model_id}'. Available: {known}[/red]")
        raise typer.Exit(code=1)
    return profile


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create an LLM provider from environment variables.

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: openai, deepseek or gemini (default: gemini)
        OPENAI_API_KEY / OPENAI_CHAT_MODEL
        DEEPSEEK_API_KEY / DEEPSEEK_MODEL
        GEMINI_API_KEY / GEMINI_MODEL
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "gemini").lower()

    if llm_provider not in LLM_ENV:
        con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
        return None

    key_var, model_var = LLM_ENV[llm_provider]
    api_key = os.getenv(key_var)
    if not api_key:
        con.print(f"[yellow]Warning: {key_var} not set, LLM provider disabled[/yellow]")
        return None

    config: dict[str, Any] = {"api_key": api_key}
    model = os.getenv(model_var)
    if model:
        config["model"] = model
    return create_llm_provider(llm_provider, **config)


def get_endpoint(profile: ModelProfile, console: Console | None = None) -> InferenceEndpoint:
    """Create the inference endpoint for a chat session.

    Environment variables:
        MODELMART_ENDPOINT: http, provider or mock (default: http when
            MODELMART_ENDPOINT_URL is set, otherwise mock)
        MODELMART_ENDPOINT_URL / MODELMART_AUTH_TOKEN / MODELMART_TIMEOUT: for http

    Raises:
        SystemExit: If the selected endpoint cannot be configured
    """
    con = console or _console
    default_kind = "http" if os.getenv("MODELMART_ENDPOINT_URL") else "mock"
    kind = os.getenv("MODELMART_ENDPOINT", default_kind).lower()

    if kind == "http":
        try:
            settings = EndpointSettings.from_env()
        except ValueError as e:
            con.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        return create_inference_endpoint("http", settings=settings)

    if kind == "provider":
        llm = get_llm(con)
        if llm is None:
            con.print("[red]Error: LLM provider not configured[/red]")
            raise typer.Exit(code=1)
        return create_inference_endpoint("provider", llm=llm)

    if kind == "mock":
        con.print("[dim]Using mock inference endpoint (set MODELMART_ENDPOINT_URL for a real one)[/dim]")
        return create_inference_endpoint("mock", persona_id=profile.id, latency=(0.3, 1.0))

    con.print(f"[red]Error: Unknown endpoint type: {kind}[/red]")
    raise typer.Exit(code=1)
