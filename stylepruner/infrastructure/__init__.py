"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (the uncss subprocess, the file
system, the console, configuration files) by implementing the interfaces
defined in the domain layer.
"""
