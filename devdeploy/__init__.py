"""devdeploy - bootstrap a local OpenShift cluster and deploy the application onto it."""

__version__ = "0.1.0"
