"""Generates an import wrapper re-exporting an addon module into the app tree."""

import posixpath
import re

from blueprintgen.errors import UsageError
from blueprintgen.strings import dasherize, pluralize

description = "Generates an import wrapper."


def _name(variables):
    return variables["dasherized_module_name"]


def _path(variables):
    return pluralize(variables["locals"]["blueprintName"])


def _root(variables):
    if variables["in_repo_addon"]:
        return posixpath.join("lib", variables["in_repo_addon"], "app")
    return "app"


def file_map_tokens(blueprint, context):
    return {"__name__": _name, "__path__": _path, "__root__": _root}


def locals(blueprint, context):
    origin = context.origin_blueprint_name or blueprint.name
    if origin == blueprint.name:
        raise UsageError("You cannot call the addon-import blueprint directly.")

    addon_name = dasherize(context.in_repo_addon or context.project.name())
    file_name = dasherize(context.entity_name or "")
    blueprint_name = re.sub(r"-addon.*$", "", origin)

    if context.pod:
        segments = [addon_name, file_name, blueprint_name]
    else:
        segments = [addon_name, pluralize(blueprint_name), file_name]
    return {"modulePath": "/".join(segments), "blueprintName": blueprint_name}
