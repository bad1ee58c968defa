"""Generates a server directory for mocks and proxies."""

from blueprintgen.models import PackageDescriptor

description = "Generates a server directory for mocks and proxies."

SERVER_PACKAGES = (
    PackageDescriptor(name="morgan", target="^1.3.2"),
    PackageDescriptor(name="glob", target="^4.0.5"),
)


def normalize_entity_name(blueprint, name):
    # The server directory is shared by every mock and proxy.
    return None


def files(blueprint, files, context):
    if context.project.is_package_missing("ember-cli-jshint"):
        return [f for f in files if not f.endswith(".jshintrc")]
    return files


async def after_install(blueprint, context, locals_):
    missing = [p for p in SERVER_PACKAGES if context.project.is_package_missing(p.name)]
    if missing and not context.dry_run:
        await context.add_packages_to_project(missing)
