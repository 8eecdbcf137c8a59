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
Staging, compilation and loading of SELinux policy modules.

A module is described by a name and the location of its type
enforcement source.  ModuleInstaller brings the host to the state
where that source is compiled, packaged and loaded, running only
the steps whose outputs are missing or out of date.
"""

import gettext

PROGNAME = "selinux-python"
t = gettext.translation(PROGNAME,
                        localedir="/usr/share/locale",
                        fallback=True)
_ = t.gettext

__version__ = "1.0"

from .errors import ModuleInstallError, PackageInstallError, \
    SourceFetchError, CompileError, PackageBuildError, PolicyInstallError
from .installer import ModuleInstaller, ModuleState, InstallReport
