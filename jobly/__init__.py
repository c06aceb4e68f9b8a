"""Jobly API - companies and jobs over a relational store."""
