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

import sys
import argparse

from . import _
from . import defaults
from .errors import ModuleInstallError
from .installer import ModuleInstaller, ModuleState
from .module import is_valid_name


class CheckName(argparse.Action):

    def __call__(self, parser, namespace, values, option_string=None):
        if not is_valid_name(values):
            raise ValueError(_("%s is not a valid module name") % values)
        setattr(namespace, self.dest, values)


def selinux_enabled():
    import selinux
    return selinux.is_selinux_enabled() == 1

def get_installer(args):
    config = defaults.Config(args.config)
    output = sys.stdout if args.verbose else None
    return ModuleInstaller(config=config, output=output, noop=args.noop)

def check_enabled(args):
    if not args.noop and not selinux_enabled():
        raise ValueError(_("SELinux is disabled, cannot manage policy modules"))

def print_report(report):
    for c in report.changes:
        print(c)
    print(report)

def install(args):
    check_enabled(args)
    installer = get_installer(args)
    print_report(installer.install(args.name, args.source, args.modules_dir))

def remove(args):
    check_enabled(args)
    installer = get_installer(args)
    print_report(installer.remove(args.name, args.modules_dir))

def status(args):
    installer = get_installer(args)
    print("%s: %s" % (args.name, ModuleState.name(installer.status(args.name, args.modules_dir))))

def catalog(args):
    installer = get_installer(args)
    cat = installer.catalog(args.name, args.source, args.modules_dir)
    if args.tag:
        for r in cat.tagged(args.tag):
            print(r)
    else:
        print(cat.to_text())

def gen_module_args(parser, source=True):
    parser.add_argument("name", action=CheckName, help=_("name of the policy module"))
    if source:
        parser.add_argument("source",
                            help=_("location of the module's type enforcement source: pkg://, file://, http(s):// or an absolute path"))
    parser.add_argument("-d", "--modules-dir", dest="modules_dir", default=None,
                        help=_("directory holding the staged module files, defaults to MODULES_DIR"))

def gen_install_args(subparsers):
    p = subparsers.add_parser("install", help=_("Stage, build and load a policy module"))
    gen_module_args(p)
    p.set_defaults(func=install)

def gen_remove_args(subparsers):
    p = subparsers.add_parser("remove", help=_("Unload a policy module and delete its files"))
    gen_module_args(p, source=False)
    p.set_defaults(func=remove)

def gen_status_args(subparsers):
    p = subparsers.add_parser("status", help=_("Show how far a policy module got"))
    gen_module_args(p, source=False)
    p.set_defaults(func=status)

def gen_catalog_args(subparsers):
    p = subparsers.add_parser("catalog", help=_("Show the resources installing a module manages"))
    gen_module_args(p)
    p.add_argument("-t", "--tag", dest="tag", default=None,
                   help=_("only show resources with this tag"))
    p.set_defaults(func=catalog)

def gen_parser():
    parser = argparse.ArgumentParser(prog="semodinstall", description=_("SELinux Policy Module Installer"))
    parser.add_argument("-c", "--config", dest="config", default=None,
                        help=_("configuration file, defaults to %s") % defaults.CONFIG_PATH)
    parser.add_argument("-n", "--noop", dest="noop", action="store_true", default=False,
                        help=_("report what would change without changing anything"))
    parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", default=False,
                        help=_("print the commands run and their output"))
    subparsers = parser.add_subparsers(dest="command", help=_("commands"))
    subparsers.required = True
    gen_install_args(subparsers)
    gen_remove_args(subparsers)
    gen_status_args(subparsers)
    gen_catalog_args(subparsers)
    return parser

def main(argv=None):
    parser = gen_parser()
    if argv is None:
        argv = sys.argv[1:]
    try:
        if len(argv) == 0:
            argv = ["-h"]
        args = parser.parse_args(args=argv)
        args.func(args)
        return 0
    except ValueError as e:
        sys.stderr.write("%s: %s\n" % (e.__class__.__name__, str(e)))
        return 1
    except IOError as e:
        sys.stderr.write("%s: %s\n" % (e.__class__.__name__, str(e)))
        return 1
    except ModuleInstallError as e:
        sys.stderr.write("%s: %s\n" % (e.__class__.__name__, str(e)))
        return 1
    except KeyboardInterrupt:
        print("Out")
        return 0

if __name__ == '__main__':
    sys.exit(main())
