"""
Preview Renderer

Turns a ResumeAggregate into the view model the templates consume, then renders
it as Markdown or printable HTML. Also renders the plain-text cover letter.
"""

from typing import Any, Dict, List, Optional, Sequence

from jinja2 import TemplateError

from resumeai.contexts.preview.aggregate import (
    ResumeAggregate,
    format_date_range,
    format_degree,
    join_technologies,
)
from resumeai.contexts.preview.exceptions import PreviewRenderError
from resumeai.contexts.preview.logger import _log_debug
from resumeai.contexts.preview.registries import TemplateRegistry
from resumeai.contexts.records import Profile
from resumeai.utils.config import load_config
from resumeai.utils.timestamp import today

OUTPUT_FORMATS = {
    "markdown": "resume.md",
    "html": "resume.html",
}

CONTACT_FIELDS = ("email", "phone", "location")
LINK_FIELDS = ("website", "linkedin", "github")


def _build_header(profile: Profile, link_labels: Dict[str, str]) -> Dict[str, Any]:
    return {
        "full_name": profile.full_name or "",
        "title": profile.title or "",
        "contacts": [
            {"kind": name, "value": getattr(profile, name)}
            for name in CONTACT_FIELDS
            if getattr(profile, name)
        ],
        "links": [
            {"kind": name, "label": link_labels.get(name, name), "url": getattr(profile, name)}
            for name in LINK_FIELDS
            if getattr(profile, name)
        ],
        "summary": profile.bio or "",
    }


def build_preview_context(aggregate: ResumeAggregate, config: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Build the template context for a resume preview.

    Only non-empty pieces are included: contact fields, links and list sections
    that have nothing to show are left out. Without a profile, everything but the
    placeholder is left out.

    Args:
        aggregate: Loaded resume aggregate
        config: Application config (defaults to load_config())

    Returns:
        Dict consumed by the resume templates
    """
    config = config or load_config()
    preview = config["preview"]

    context = {
        "has_profile": aggregate.profile is not None,
        "placeholder": preview["placeholder"],
        "titles": preview["section_titles"],
        "header": None,
        "experience": [],
        "education": [],
        "skill_groups": [],
        "projects": [],
    }
    if aggregate.profile is None:
        return context

    date_range = dict(present_label=preview["present_label"], separator=preview["date_separator"])
    separator = preview["list_separator"]

    context["header"] = _build_header(aggregate.profile, preview["link_labels"])

    context["experience"] = [
        {
            "position": exp.position,
            "company": exp.company,
            "location": exp.location,
            "dates": format_date_range(
                exp.start_date, exp.effective_end_date, is_current=exp.is_current, **date_range
            ),
            "description": exp.description,
        }
        for exp in aggregate.experiences
    ]

    context["education"] = [
        {
            "heading": format_degree(edu.degree, edu.field_of_study),
            "institution": edu.institution,
            "dates": format_date_range(edu.start_date, edu.end_date, **date_range),
            "gpa": edu.gpa,
            "description": edu.description,
        }
        for edu in aggregate.educations
    ]

    context["skill_groups"] = [
        {"category": category, "skills": separator.join(skill.name for skill in skills)}
        for category, skills in aggregate.skills_by_category.items()
    ]

    context["projects"] = [
        {
            "title": project.title,
            "description": project.description,
            "technologies": join_technologies(project.technologies, separator),
        }
        for project in aggregate.featured_projects
    ]

    return context


def _render(registry: TemplateRegistry, name: str, context: Dict[str, Any]) -> str:
    template = registry.get_template(name)
    try:
        return template.render(**context)
    except TemplateError as e:
        raise PreviewRenderError(
            "Failed to render preview template",
            template_name=name,
            template_path=registry.get_template_path(name),
            original_error=e,
        ) from e


def render_resume(
    aggregate: ResumeAggregate,
    output_format: str = "markdown",
    config: Dict[str, Any] = None,
    registry: TemplateRegistry = None,
) -> str:
    """
    Render the resume preview.

    Args:
        aggregate: Loaded resume aggregate
        output_format: "markdown" or "html"
        config: Application config (defaults to load_config())
        registry: Template registry (defaults to the packaged templates)

    Returns:
        Rendered document

    Raises:
        ValueError: If output_format is unknown
        PreviewRenderError: If the template fails to render
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid output format: {output_format}. Must be one of {list(OUTPUT_FORMATS)}"
        )

    registry = registry or TemplateRegistry()
    context = build_preview_context(aggregate, config)
    _log_debug(f"Rendering {output_format} preview for user {aggregate.user_id}")
    return _render(registry, OUTPUT_FORMATS[output_format], context)


def render_cover_letter(
    profile: Optional[Profile],
    skills: Sequence[str] = (),
    date: str = None,
    config: Dict[str, Any] = None,
    registry: TemplateRegistry = None,
) -> str:
    """
    Render a plain-text cover letter from the profile and skill names.

    Empty values fall back to the configured defaults (job title, skills text, name).

    Args:
        profile: User profile, may be None
        skills: Skill names to mention
        date: Date line (defaults to today)
        config: Application config (defaults to load_config())
        registry: Template registry (defaults to the packaged templates)

    Returns:
        Cover letter text
    """
    defaults = (config or load_config())["cover_letter"]
    skill_names: List[str] = [name for name in skills if name]

    context = {
        "date": date or today(),
        "job_title": (profile.title if profile else "") or defaults["default_job_title"],
        "full_name": (profile.full_name if profile else "") or defaults["default_full_name"],
        "summary": (profile.bio if profile else "") or "",
        "skills_text": ", ".join(skill_names) or defaults["default_skills_text"],
    }
    return _render(registry or TemplateRegistry(), "cover_letter.txt", context)
