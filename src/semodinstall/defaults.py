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

import os
import re

CONFIG_PATH = "/etc/selinux/semodinstall.conf"

DEFAULTS = {
    "MODULES_DIR": "/var/lib/selinux/semodinstall",
    "SOURCE_ROOT": "/etc/selinux/semodinstall/files",
    "STATE_DIR": "",
    "REQUIRED_PACKAGES": "selinux-policy-devel checkpolicy",
    "PACKAGE_QUERY": "rpm -q",
    "PACKAGE_INSTALL": "yum -y install",
    "CHECKMODULE": "checkmodule",
    "SEMODULE_PACKAGE": "semodule_package",
    "SEMODULE": "semodule",
    "FETCH_TIMEOUT": "30",
}


# Settings come from a key = value file; anything not named there
# keeps its built-in default
class Config(object):
    def __init__(self, pathname=None, **overrides):
        if pathname is None:
            pathname = config_path()
        self.config = dict(DEFAULTS)
        if not os.path.exists(pathname):
            self.config_pathname = "(defaults)"
        else:
            self.config_pathname = pathname
            self.read(pathname)
        for key, value in overrides.items():
            self.config[key.upper()] = value

    def read(self, pathname):
        ignore = re.compile(r"^\s*(?:#.+)?$")
        consider = re.compile(r"^\s*(\w+)\s*=\s*(.*?)\s*$")
        with open(pathname, "r") as fd:
            for lineno, line in enumerate(fd):
                if ignore.match(line): continue
                mo = consider.match(line)
                if not mo:
                    raise ValueError("%s:%d: line is not in key = value format" % (pathname, lineno+1))
                self.config[mo.group(1)] = mo.group(2)

    def get(self, key):
        value = self.config.get(key, None)
        if value is None:
            raise ValueError("%s was not in %s" % (key, self.config_pathname))
        return value

    def getlist(self, key):
        return self.get(key).split()

    def getint(self, key):
        value = self.get(key)
        try:
            return int(value)
        except ValueError:
            raise ValueError("%s in %s must be an integer, not %r" % (key, self.config_pathname, value))


"""
Various default settings, including file and directory locations.
"""

def config_path():
    return os.environ.get("SEMODINSTALL_CONF", CONFIG_PATH)

def modules_dir(config=None):
    return (config or Config()).get("MODULES_DIR")

def state_dir(config, modules_dir):
    return config.get("STATE_DIR") or modules_dir
