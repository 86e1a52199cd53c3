"""Project and section tools."""
from .envelope import Envelope, success
from .normalize import project_create_params, project_update_params, section_params


async def get_projects(ctx, args: dict) -> Envelope:
    projects = await ctx.client.get_projects()
    return success(projects=projects, count=len(projects))


async def create_project(ctx, args: dict) -> Envelope:
    project = await ctx.client.add_project(project_create_params(args))
    return success(project=project)


async def update_project(ctx, args: dict) -> Envelope:
    project = await ctx.client.update_project(args["project_id"], project_update_params(args))
    return success(project=project)


async def get_project_sections(ctx, args: dict) -> Envelope:
    sections = await ctx.client.get_sections(args["project_id"])
    return success(sections=sections, count=len(sections))


async def create_section(ctx, args: dict) -> Envelope:
    section = await ctx.client.add_section(section_params(args))
    return success(section=section)
