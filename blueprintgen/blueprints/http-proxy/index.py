"""Generates a relative proxy to another server."""

from blueprintgen.installer import install

description = "Generates a relative proxy to another server."
anonymous_options = ("local-path", "remote-url")


def locals(blueprint, context):
    args = context.args
    return {
        "path": "/" + (context.entity_name or "").lstrip("/"),
        "proxyUrl": args[2] if len(args) > 2 else "",
    }


async def before_install(blueprint, context, locals_):
    server = context.lookup_blueprint("server")
    await install(server, context)


async def after_install(blueprint, context, locals_):
    if not context.dry_run:
        await context.add_packages_to_project([{"name": "http-proxy", "target": "^1.1.6"}])
