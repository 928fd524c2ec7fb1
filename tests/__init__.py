"""Test suite for profilecli."""
