# Copyright (C) 2026 semodinstall contributors
# see file 'COPYING' for use and warranty information
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License as
# published by the Free Software Foundation; version 2 only
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA 02111-1307 USA
#

"""
Records of the resources a module installation manages.

Each resource carries a set of tags.  Tags group resources so that
related ones can be found together, for example every build output of
every module (selinux-module-build).
"""

import collections

MODULE_TAG = "selinux-module"
BUILD_TAG = "selinux-module-build"


class Resource:
    type = None

    def __init__(self, title, tags=None):
        self.title = title
        self.tags = list(tags or [])

    def key(self):
        return (self.type, self.title)

    def tagged(self, tag):
        return tag in self.tags

    def attributes(self):
        return collections.OrderedDict([("tag", self.tags)])

    def __str__(self):
        return "%s[%s]" % (self.type.capitalize(), self.title)

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.title)


class Package(Resource):
    type = "package"

    def __init__(self, title, tags=None):
        Resource.__init__(self, title, tags)
        self.ensure = "present"

    def attributes(self):
        a = Resource.attributes(self)
        a["ensure"] = self.ensure
        return a


class File(Resource):
    type = "file"

    def __init__(self, path, ensure="present", source=None, tags=None):
        Resource.__init__(self, path, tags)
        self.path = path
        self.ensure = ensure
        self.source = source

    def attributes(self):
        a = Resource.attributes(self)
        a["ensure"] = self.ensure
        if self.source is not None:
            a["source"] = self.source
        return a


class Exec(Resource):
    type = "exec"

    def __init__(self, title, command, cwd=None, tags=None):
        Resource.__init__(self, title, tags)
        self.command = command
        self.cwd = cwd

    def attributes(self):
        a = Resource.attributes(self)
        a["command"] = " ".join(self.command)
        if self.cwd is not None:
            a["cwd"] = self.cwd
        return a


class Catalog:
    """An ordered collection of resources, unique by type and title."""

    def __init__(self):
        self.resources = collections.OrderedDict()

    def add(self, resource):
        if resource.key() in self.resources:
            raise ValueError("Duplicate declaration: %s is already declared" % resource)
        self.resources[resource.key()] = resource
        return resource

    def get(self, type, title):
        return self.resources.get((type, title))

    def tagged(self, tag):
        return [r for r in self if r.tagged(tag)]

    def __iter__(self):
        return iter(self.resources.values())

    def __len__(self):
        return len(self.resources)

    def __contains__(self, resource):
        return resource.key() in self.resources

    def to_text(self):
        lines = []
        for r in self:
            lines.append("%s {" % r)
            for k, v in r.attributes().items():
                if isinstance(v, list):
                    v = "[" + ", ".join(v) + "]"
                lines.append("  %-8s => %s" % (k, v))
            lines.append("}")
        return "\n".join(lines)
