"""
Tests package - Test suite for the Kube operator core.

Contains:
- unit/: Unit tests for individual components
- fixtures/: Test data and sample kubeconfigs
"""
