# 📄 File: plant_tracker/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of the Plant Tracker app uses, like settings, logging and
# the standard error types.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package: configuration, exception hierarchy, structured logging, date
# utilities and external API infrastructure.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities
