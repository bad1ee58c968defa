"""Generates a lib directory for in-repo addons."""

description = "Generates a lib directory for in-repo addons."


def normalize_entity_name(blueprint, name):
    return name


def files(blueprint, files, context):
    if context.project.is_package_missing("ember-cli-jshint"):
        return [f for f in files if not f.endswith(".jshintrc")]
    return files


def before_install(blueprint, context, locals_):
    if not context.dry_run:
        (context.target / "lib").mkdir(parents=True, exist_ok=True)
