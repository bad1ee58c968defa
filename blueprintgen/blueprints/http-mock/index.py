"""Generates a mock api endpoint in the /api prefix."""

from blueprintgen.installer import install

description = "Generates a mock api endpoint in /api prefix."
anonymous_options = ("endpoint-path",)


def locals(blueprint, context):
    return {"path": "/" + (context.entity_name or "").lstrip("/")}


async def before_install(blueprint, context, locals_):
    server = context.lookup_blueprint("server")
    await install(server, context)


async def after_install(blueprint, context, locals_):
    if not context.dry_run and context.project.is_package_missing("express"):
        await context.add_packages_to_project([{"name": "express", "target": "^4.8.5"}])
