# Output formatters for the admin CLI

import json


def format_text(profiles: list[dict], verbose: bool = False) -> str:
    """
    Format profiles as plain text.

    Returns - Formatted text string
    """
    if not profiles:
        return "No profiles found.\n"

    output = []
    for i, profile in enumerate(profiles, 1):
        output.append(f"\n{i}. {profile.get('displayName', 'N/A')} (id {profile.get('id')})")
        output.append(f"   Skills: {', '.join(profile.get('skills') or []) or 'N/A'}")
        if verbose:
            output.append(f"   University: {profile.get('university') or 'N/A'}")
            output.append(f"   Year: {profile.get('year') or 'N/A'}")
            output.append(f"   Availability: {', '.join(profile.get('availability') or []) or 'N/A'}")
            if profile.get("bio"):
                output.append(f"   Bio: {profile['bio']}")
        output.append("")

    return "\n".join(output)


def format_json(profiles: list[dict]) -> str:
    """
    Format profiles as JSON.

    Returns - JSON string
    """
    return json.dumps(profiles, indent=2, default=str)


def format_table(profiles: list[dict]) -> str:
    """
    Format profiles as a fixed-width table.

    Returns - Table string
    """
    if not profiles:
        return "No profiles found.\n"

    header = f"{'ID':<6} {'Name':<30} {'University':<25} {'Skills'}"
    lines = [header, "-" * len(header)]
    for profile in profiles:
        name = (profile.get("displayName") or "")[:30]
        university = (profile.get("university") or "")[:25]
        skills = ", ".join(profile.get("skills") or [])
        lines.append(f"{profile.get('id', ''):<6} {name:<30} {university:<25} {skills}")
    return "\n".join(lines) + "\n"


def format_output(profiles: list[dict], format_type: str = "text", verbose: bool = False) -> str:
    """
    Format profiles in the requested output format.

    Args:
        profiles - List of serialized profiles
        format_type - "text", "json" or "table"
        verbose - Include extra fields in text output
    """
    if format_type == "json":
        return format_json(profiles)
    if format_type == "table":
        return format_table(profiles)
    return format_text(profiles, verbose=verbose)
