"""
Command Line Interface Package

Command Structure:
- rebudget: Main entry point with utility commands (version, config)
- rebudget template: Default policy rates document
- rebudget preview: Impact of a single transfer before queueing it
- rebudget project: Apply a transfer queue and export mapping, budget and summary
"""
