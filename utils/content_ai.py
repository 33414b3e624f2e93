"""
Generative content for tenant sites (Gemini through LangChain).

Every generator sends one prompt, pulls the first JSON object or array out
of the reply and falls back to a fixed value when the reply cannot be parsed.
"""

from __future__ import annotations

import base64
import copy
import json
import logging
import os
import re
from typing import Any, Optional, Sequence

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

logger = logging.getLogger("sitebuilder.content")

DEFAULT_MODEL = "gemini-2.0-flash"

_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class ContentServiceUnavailable(Exception):
    """No API key configured for the content service."""


FALLBACK_LOGO_ANALYSIS: dict[str, Any] = {
    "companyName": "",
    "industry": "",
    "colors": {
        "primary": "#000000",
        "secondary": "#ffffff",
        "accent": "#cccccc",
        "text": "#333333",
        "background": "#ffffff",
    },
    "style": "",
    "symbols": "",
}

FALLBACK_TAGLINE_SERVICES: dict[str, Any] = {
    "tagline": "Keeping you cool when it matters most",
    "services": [
        {
            "title": "AC Installation",
            "description": "Professional installation of new air conditioning systems.",
        },
        {
            "title": "AC Repair",
            "description": "Fast and reliable repair services for all AC models.",
        },
        {
            "title": "AC Maintenance",
            "description": "Regular maintenance to keep your AC running efficiently.",
        },
    ],
}

FALLBACK_SERVICES: list[dict[str, str]] = [
    {"title": "Service 1", "description": "Description of service 1"},
    {"title": "Service 2", "description": "Description of service 2"},
    {"title": "Service 3", "description": "Description of service 3"},
]


def fallback_site_content(company_name: str) -> dict[str, str]:
    return {
        "homeTitle": f"Welcome to {company_name}",
        "tagline": "Your trusted partner",
        "aboutUs": f"{company_name} is a leading provider in our industry.",
        "contactBlurb": "Contact us today to learn more about our services.",
    }


# ---------------------------------------------------------------------
# LLM client
# ---------------------------------------------------------------------
def get_llm() -> ChatGoogleGenerativeAI:
    api_key = os.getenv("GEMINI_API_KEY", "").strip()
    if not api_key:
        raise ContentServiceUnavailable("Gemini API key not configured")
    return ChatGoogleGenerativeAI(
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        google_api_key=api_key,
        temperature=0.7,
    )


def _reply_text(reply: Any) -> str:
    content = getattr(reply, "content", reply)
    if isinstance(content, list):
        # multimodal replies come back as content blocks
        parts = []
        for block in content:
            if isinstance(block, dict):
                parts.append(str(block.get("text", "")))
            else:
                parts.append(str(block))
        return "".join(parts)
    return str(content or "")


def extract_json(text: str, fallback: Any) -> Any:
    """First JSON object (or array, matching the fallback's shape) in `text`."""
    pattern = _ARRAY_RE if isinstance(fallback, list) else _OBJECT_RE
    match = pattern.search(text or "")
    if not match:
        logger.warning("No JSON found in model reply, using fallback")
        return copy.deepcopy(fallback)
    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("Could not parse JSON from model reply: %s", e)
        return copy.deepcopy(fallback)
    if not isinstance(value, type(fallback)):
        return copy.deepcopy(fallback)
    return value


def _ask(prompt: Any, fallback: Any, llm: Optional[Any] = None) -> Any:
    model = llm or get_llm()
    reply = model.invoke(prompt)
    return extract_json(_reply_text(reply), fallback)


# ---------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------
def analyze_logo(
    image_bytes: bytes,
    mime_type: str,
    industry: str = "AC services",
    llm: Optional[Any] = None,
) -> dict[str, Any]:
    """Logo analysis (name, industry, colors, style) plus tagline and services."""
    model = llm or get_llm()
    encoded = base64.b64encode(image_bytes).decode("ascii")
    prompt = (
        "Analyze this logo image and extract: the company name (if visible), "
        "the industry it suggests, the main colors, the style of the logo and "
        "any symbols it contains. For colors give hex values for primary, "
        "secondary, accent, text and background. Format the response as JSON "
        "with keys: companyName, industry, colors (object with primary, "
        "secondary, accent, text, background), style, symbols"
    )
    message = HumanMessage(
        content=[
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": f"data:{mime_type};base64,{encoded}"},
        ]
    )
    analysis = _ask([message], FALLBACK_LOGO_ANALYSIS, llm=model)

    services_prompt = (
        f"Create content for a {industry or 'business'} company website. Include "
        "a catchy tagline and 3-5 realistic services with titles and "
        "descriptions. Format the response as JSON with keys: tagline, "
        "services (array of objects with title and description)"
    )
    extras = _ask(services_prompt, FALLBACK_TAGLINE_SERVICES, llm=model)

    return {
        **analysis,
        "tagline": extras.get("tagline", FALLBACK_TAGLINE_SERVICES["tagline"]),
        "services": extras.get("services", FALLBACK_TAGLINE_SERVICES["services"]),
    }


def generate_seo(
    company_name: str,
    industry: Optional[str] = None,
    colors: Sequence[str] = (),
    llm: Optional[Any] = None,
) -> dict[str, str]:
    lines = [
        "Create SEO content for a company website with the following details:",
        f"Company Name: {company_name}",
    ]
    if industry:
        lines.append(f"Industry: {industry}")
    if colors:
        lines.append(f"Brand Colors: {', '.join(colors)}")
    lines.append(
        "Provide an SEO title (max 60 characters), an SEO description "
        "(max 160 characters) and up to 10 comma-separated SEO keywords. "
        "Format the response as JSON with keys: seoTitle, seoDescription, seoKeywords"
    )
    seo = _ask("\n".join(lines), {}, llm=llm)
    return {
        "seoTitle": str(seo.get("seoTitle") or company_name),
        "seoDescription": str(seo.get("seoDescription") or ""),
        "seoKeywords": str(seo.get("seoKeywords") or ""),
    }


def generate_site_content(
    company_name: str, industry: Optional[str] = None, llm: Optional[Any] = None
) -> dict[str, str]:
    in_industry = f" in the {industry} industry" if industry else ""
    prompt = (
        f'Create content for a website for a company called "{company_name}"{in_industry}. '
        "Include a home title, tagline, about us section (150-200 words) and a "
        "contact section blurb. Format the response as JSON with keys: "
        "homeTitle, tagline, aboutUs, contactBlurb"
    )
    fallback = fallback_site_content(company_name)
    content = _ask(prompt, fallback, llm=llm)
    return {key: str(content.get(key) or fallback[key]) for key in fallback}


def generate_services(
    company_name: str, industry: Optional[str] = None, llm: Optional[Any] = None
) -> list[dict[str, str]]:
    in_industry = f" in the {industry} industry" if industry else ""
    prompt = (
        f'Create 3-5 services with titles and descriptions for a company called "{company_name}"{in_industry}. '
        "Each service needs a concise title and a 30-50 word description. "
        'Format the response as a JSON array: [{"title": "...", "description": "..."}]'
    )
    services = _ask(prompt, FALLBACK_SERVICES, llm=llm)
    cleaned = [
        {"title": str(s.get("title", "")), "description": str(s.get("description", ""))}
        for s in services
        if isinstance(s, dict) and s.get("title")
    ]
    return cleaned or copy.deepcopy(FALLBACK_SERVICES)
