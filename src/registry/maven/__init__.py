"""Maven Central package.

- client.py: solr search lookups, used for both Maven and Gradle coordinates
"""
