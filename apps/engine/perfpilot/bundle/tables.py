"""Static dependency knowledge tables.

Read-only, process-wide data. Order is significant: duplicate groups
report member names in the order listed here.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional


@dataclass(frozen=True)
class HeavyPackageInfo:
    size: str
    alternatives: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class DuplicateGroup:
    name: str
    members: tuple[str, ...]
    reason: str


# Packages known to add a large amount to the client bundle in Next.js apps.
HEAVY_DEPENDENCIES = MappingProxyType({
    "moment": HeavyPackageInfo("~300KB", ("date-fns", "dayjs")),
    "lodash": HeavyPackageInfo("~70KB", ("lodash-es", "just use native methods")),
    "jquery": HeavyPackageInfo("~90KB", ("use native DOM methods",)),
    "chart.js": HeavyPackageInfo("~160KB", ("lightweight-charts", "recharts")),
    "bootstrap": HeavyPackageInfo("~190KB", ("tailwindcss",)),
    "material-ui": HeavyPackageInfo("~350KB", ("shadcn/ui", "@radix-ui/react")),
    "material-ui/core": HeavyPackageInfo("~350KB", ("shadcn/ui", "@radix-ui/react")),
    "@mui/material": HeavyPackageInfo("~350KB", ("shadcn/ui", "@radix-ui/react")),
    "antd": HeavyPackageInfo("~400KB", ("shadcn/ui", "@radix-ui/react")),
    "gatsby": HeavyPackageInfo("~250KB", ("next.js",)),
    "axios": HeavyPackageInfo("~40KB", ("fetch API", "ky")),
    "styled-components": HeavyPackageInfo("~50KB", ("emotion", "tailwindcss")),
})

# Packages that duplicate what Next.js already provides.
UNNECESSARY_DEPENDENCIES = MappingProxyType({
    "react-router": "Next.js has built-in routing, no need for react-router",
    "react-router-dom": "Next.js has built-in routing, no need for react-router-dom",
    "webpack": "Next.js handles webpack configuration internally",
    "babel": "Next.js handles babel configuration internally",
    "express": "For API routes, use Next.js API routes instead (unless needed for custom server)",
    "parcel": "Next.js has its own bundler; parcel is redundant",
    "serve": "Use built-in Next.js production server or Vercel deployment",
})

DUPLICATE_GROUPS: tuple[DuplicateGroup, ...] = (
    DuplicateGroup(
        name="state-management",
        members=("redux", "react-redux", "zustand", "jotai", "recoil", "mobx", "mobx-react"),
        reason="Multiple state management libraries can increase bundle size and complexity",
    ),
    DuplicateGroup(
        name="ui-components",
        members=("@mui/material", "@chakra-ui/react", "antd", "react-bootstrap", "semantic-ui-react"),
        reason="Multiple UI component libraries significantly increase bundle size",
    ),
    DuplicateGroup(
        name="http-clients",
        members=("axios", "superagent", "got", "request", "node-fetch"),
        reason="Multiple HTTP client libraries are unnecessary; consider using the native fetch API",
    ),
)

# Assumed contribution of a package not in HEAVY_DEPENDENCIES.
DEFAULT_PACKAGE_SIZE_KB = 20
