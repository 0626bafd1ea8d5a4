#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: CgBI PNG ToolKit (CGTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
CgBI PNG ToolKit Test Suite.

This package contains tests for CGTK components including:
- Unit tests for individual functions and classes
- Integration tests for the decode, encode and Pillow plugin workflows
- End-to-end tests for CLI commands
"""
