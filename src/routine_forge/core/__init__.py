"""Core generation engine: policies, templates, pools, overload, assembly."""
