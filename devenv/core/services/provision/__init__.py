"""
Provisioning service — Clang-built Python + Boost on a Linux host.

Layers (onion, inner to outer):

    data → domain → detection → execution → orchestration

Inner layers never import outer ones.  Import stage entry points from
``devenv.core.services.provision.orchestration``.
"""
