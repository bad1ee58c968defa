"""{{ dasherizedModuleName }} blueprint."""

description = ""

# Hooks receive the blueprint first; uncomment the ones you need.
#
# def locals(blueprint, context):
#     # Return custom template variables here.
#     return {}
#
# async def after_install(blueprint, context, locals_):
#     # Perform extra work here, e.g. add packages to the project.
#     pass
