"""Next.js performance rule catalog.

Rules are evaluated in the order they appear in PERFORMANCE_RULES, and
findings are reported in that same order. Detection is regex-based and
best-effort: commented-out code and string literals can trigger rules.
"""

import re

from perfpilot.rules.types import Category, Predicate, Rule, Severity, TextPattern

# ---------------------------------------------------------------------------
# Shared sub-patterns used by predicate rules
# ---------------------------------------------------------------------------

_NEXT_IMAGE_IMPORT = re.compile(r"""import\s+\w+\s+from\s+['"]next/image['"]""")
_HERO_CLASS = re.compile(r"""className=["'].*hero.*["']""")
_HERO_WITH_PRIORITY = re.compile(r"""<\w+[^>]*className=["'].*hero.*["'][^>]*priority""")
_FETCH_CALL = re.compile(r"\bfetch\s*\(")
_USE_QUERY_CALL = re.compile(r"useQuery\s*\(")
_SUSPENSE_IMPORT = re.compile(r"import\s+\{\s*Suspense\s*\}")
_APP_ROUTER_PAGE = re.compile(r"export\s+default\s+function\s+\w+Page")
_PPR_FLAG = re.compile(r"export\s+const\s+experimental_ppr")
_USE_CLIENT = re.compile(r"""^["']use client["'];""", re.MULTILINE)
# The data-fetching and import rules only see a directive that closes with a double quote
_USE_CLIENT_DQ_CLOSE = re.compile(r"""^["']use client";""", re.MULTILINE)
_ASYNC_HANDLER_IN_COMPONENT = re.compile(r"function.*\(.*\{.*async function.*\(.*\{")
_BIND_NULL = re.compile(r"\.bind\(null\)")
_METADATA_EXPORT = re.compile(r"export\s+const\s+metadata\s*=")
_GENERATE_METADATA = re.compile(r"export\s+async\s+function\s+generateMetadata")
_ROUTE_HANDLER = re.compile(r"export\s+(async\s+)?function\s+(GET|POST|PUT|DELETE|PATCH)")
_EDGE_RUNTIME = re.compile(r"""export\s+const\s+runtime\s*=\s*['"]edge['"]""")
_CACHE_CONTROL_HEADER = re.compile(r"""headers\s*\(\s*\{\s*['"]Cache-Control['"]""")
_REVALIDATION = re.compile(r"revalidatePath|revalidateTag|next/cache")
_DATA_HOOKS = re.compile(r"useSWR|useQuery")
_SERVER_ONLY_IMPORT = re.compile(
    r"""import.*from\s+['"]server-only|["']\.\./.*\.server['"]""", re.IGNORECASE
)
_ASYNC_WORK = re.compile(r"async\s+function|await\s+fetch|useEffect")
_ERROR_HANDLING = re.compile(r"error\.tsx|ErrorBoundary|try\s*\{")


def _missing_image_priority(code: str) -> bool:
    return (
        _NEXT_IMAGE_IMPORT.search(code) is not None
        and _HERO_CLASS.search(code) is not None
        and _HERO_WITH_PRIORITY.search(code) is None
    )


def _missing_suspense(code: str) -> bool:
    fetches = _FETCH_CALL.search(code) or _USE_QUERY_CALL.search(code)
    return fetches is not None and _SUSPENSE_IMPORT.search(code) is None


def _no_partial_prerendering(code: str) -> bool:
    return _APP_ROUTER_PAGE.search(code) is not None and _PPR_FLAG.search(code) is None


def _client_component_with_server_actions(code: str) -> bool:
    return (
        _USE_CLIENT.search(code) is not None
        and _ASYNC_HANDLER_IN_COMPONENT.search(code) is not None
        and _BIND_NULL.search(code) is not None
    )


def _missing_metadata(code: str) -> bool:
    return (
        _APP_ROUTER_PAGE.search(code) is not None
        and _METADATA_EXPORT.search(code) is None
        and _GENERATE_METADATA.search(code) is None
    )


def _inefficient_route_handlers(code: str) -> bool:
    if _ROUTE_HANDLER.search(code) is None:
        return False
    return not (_EDGE_RUNTIME.search(code) or _CACHE_CONTROL_HEADER.search(code))


def _client_fetch_without_revalidation(code: str) -> bool:
    if _USE_CLIENT_DQ_CLOSE.search(code) is None or _FETCH_CALL.search(code) is None:
        return False
    return not (_REVALIDATION.search(code) or _DATA_HOOKS.search(code))


def _non_dynamic_imports(code: str) -> bool:
    return _USE_CLIENT_DQ_CLOSE.search(code) is not None and _SERVER_ONLY_IMPORT.search(code) is not None


def _missing_error_boundary(code: str) -> bool:
    return _ASYNC_WORK.search(code) is not None and _ERROR_HANDLING.search(code) is None


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

PERFORMANCE_RULES: tuple[Rule, ...] = (
    Rule(
        id="img-tag-usage",
        name="HTML img tag usage",
        description="Using HTML img tags instead of next/image component",
        pattern=TextPattern(re.compile(r"<img\s+[^>]*src=", re.IGNORECASE)),
        severity=Severity.CRITICAL,
        category=Category.IMAGES,
        recommendation=(
            "Replace HTML img tags with the next/image component for automatic "
            "image optimization."
        ),
        code_example="""// Before
<img src="/profile.jpg" width="500" height="300" alt="Profile" />

// After
import Image from 'next/image'

<Image
  src="/profile.jpg"
  width={500}
  height={300}
  alt="Profile"
/>""",
        docs="https://nextjs.org/docs/api-reference/next/image",
    ),
    Rule(
        id="missing-image-dimensions",
        name="Missing image dimensions",
        description="Using next/image without width and height props",
        pattern=TextPattern(
            re.compile(
                r"""import\s+\w+\s+from\s+['"]next/image['"][\s\S]*?<\w+[^>]*src=(?!.*width=.*height=)"""
            )
        ),
        severity=Severity.WARNING,
        category=Category.IMAGES,
        recommendation=(
            "Always specify width and height props for next/image to prevent "
            "layout shifts."
        ),
        code_example="""// Before
<Image src="/profile.jpg" alt="Profile" />

// After
<Image
  src="/profile.jpg"
  width={500}
  height={300}
  alt="Profile"
/>""",
        docs="https://nextjs.org/docs/api-reference/next/image#width",
    ),
    Rule(
        id="missing-image-priority",
        name="Missing priority on LCP image",
        description="The main hero/banner image should have the priority prop",
        pattern=Predicate(_missing_image_priority),
        severity=Severity.WARNING,
        category=Category.IMAGES,
        recommendation="Add the priority prop to your hero/banner images to improve LCP.",
        code_example="""// Before
<Image
  src="/hero.jpg"
  className="hero-image"
  width={1200}
  height={600}
  alt="Hero"
/>

// After
<Image
  src="/hero.jpg"
  className="hero-image"
  width={1200}
  height={600}
  alt="Hero"
  priority
/>""",
        docs="https://nextjs.org/docs/api-reference/next/image#priority",
    ),
    Rule(
        id="font-without-next-font",
        name="Font without next/font",
        description="Using custom fonts without next/font optimization",
        pattern=TextPattern(re.compile(r"@font-face", re.IGNORECASE)),
        severity=Severity.WARNING,
        category=Category.FONTS,
        recommendation="Use next/font to automatically optimize and load custom fonts.",
        code_example="""// Before
@font-face {
  font-family: 'CustomFont';
  src: url('/fonts/CustomFont.woff2');
}

// After
import { Inter } from 'next/font/google'
// or for local fonts:
// import localFont from 'next/font/local'

const inter = Inter({ subsets: ['latin'] })

export default function Layout({ children }) {
  return (
    <html lang="en" className={inter.className}>
      <body>{children}</body>
    </html>
  )
}""",
        docs="https://nextjs.org/docs/basic-features/font-optimization",
    ),
    Rule(
        id="large-dependencies",
        name="Large dependencies import",
        description="Importing large libraries that could be loaded dynamically",
        pattern=TextPattern(
            re.compile(
                r"""import\s+\w+\s+from\s+['"](?:chart\.js|three|monaco-editor|draft-js|codemirror"""
                r"""|highlight\.js|pdf\.js|quill|react-big-calendar|react-data-grid"""
                r"""|react-beautiful-dnd)['"]""",
                re.IGNORECASE,
            )
        ),
        severity=Severity.WARNING,
        category=Category.IMPORTS,
        recommendation="Use dynamic imports for large libraries to reduce initial bundle size.",
        code_example="""// Before
import Chart from 'chart.js';

// After
import dynamic from 'next/dynamic';

const Chart = dynamic(() => import('chart.js'), {
  ssr: false, // Optional: disable server-side rendering
  loading: () => <p>Loading chart...</p>
});""",
        docs="https://nextjs.org/docs/advanced-features/dynamic-import",
    ),
    Rule(
        id="missing-suspense",
        name="Missing Suspense boundaries",
        description="Components that fetch data without Suspense boundaries",
        pattern=Predicate(_missing_suspense),
        severity=Severity.INFO,
        category=Category.RENDERING,
        recommendation=(
            "Use Suspense boundaries around components that fetch data to improve "
            "perceived performance."
        ),
        code_example="""// Before
function Dashboard() {
  return (
    <div>
      <Profile />
      <DataTable />
    </div>
  );
}

// After
import { Suspense } from 'react';

function Dashboard() {
  return (
    <div>
      <Profile />
      <Suspense fallback={<div>Loading data...</div>}>
        <DataTable />
      </Suspense>
    </div>
  );
}""",
        docs="https://nextjs.org/docs/app/building-your-application/routing/loading-ui-and-streaming",
    ),
    Rule(
        id="no-partial-prerendering",
        name="Not using Partial Prerendering",
        description="App Router pages without Partial Prerendering configuration",
        pattern=Predicate(_no_partial_prerendering),
        severity=Severity.INFO,
        category=Category.RENDERING,
        recommendation="Consider using Partial Prerendering for faster initial page loads.",
        code_example="""// Before
export default function ProductPage() {
  return (
    <div>
      <ProductInfo />
      <RelatedProducts />
    </div>
  );
}

// After
// Enable Partial Prerendering
export const experimental_ppr = true;

export default function ProductPage() {
  return (
    <div>
      <ProductInfo />
      <Suspense fallback={<RelatedProductsSkeleton />}>
        <RelatedProducts />
      </Suspense>
    </div>
  );
}""",
        docs="https://nextjs.org/docs/app/building-your-application/rendering/partial-prerendering",
    ),
    Rule(
        id="inline-scripts",
        name="Inline scripts without next/script",
        description="Using inline script tags instead of next/script component",
        pattern=TextPattern(re.compile(r"<script\s+[^>]*>", re.IGNORECASE)),
        severity=Severity.WARNING,
        category=Category.SCRIPTS,
        recommendation="Use the next/script component to properly manage script loading.",
        code_example="""// Before
<script src="https://example.com/analytics.js"></script>

// After
import Script from 'next/script';

<Script
  src="https://example.com/analytics.js"
  strategy="afterInteractive"
/>""",
        docs="https://nextjs.org/docs/basic-features/script",
    ),
    Rule(
        id="client-component-with-server-actions",
        name="Client component with server actions",
        description=(
            "Using server actions in a client component through props can cause "
            "unnecessary client-server round trips"
        ),
        pattern=Predicate(_client_component_with_server_actions),
        severity=Severity.WARNING,
        category=Category.COMPONENTS,
        recommendation=(
            "Move server actions to a separate server component or use Form Action "
            "instead of passing as props."
        ),
        code_example="""// Before - Client Component
"use client";
import { submitAction } from './actions';

export default function MyForm() {
  return (
    <form action={submitAction.bind(null, id)}>
      <button type="submit">Submit</button>
    </form>
  );
}

// After - Better Pattern
"use client";

export default function MyForm() {
  return (
    <form action={async (formData) => {
      const result = await fetch('/api/submit', {
        method: 'POST',
        body: formData,
      });
    }}>
      <button type="submit">Submit</button>
    </form>
  );
}""",
        docs="https://nextjs.org/docs/app/building-your-application/data-fetching/server-actions-and-mutations",
    ),
    Rule(
        id="missing-metadata",
        name="Missing metadata in App Router",
        description="App Router pages should define metadata for SEO optimization",
        pattern=Predicate(_missing_metadata),
        severity=Severity.WARNING,
        category=Category.ROUTING,
        recommendation="Define metadata for better SEO and social sharing.",
        code_example="""// Before
export default function BlogPage() {
  return <div>Blog content</div>;
}

// After
export const metadata = {
  title: 'Blog Post Title',
  description: 'Description of the blog post for better SEO',
  openGraph: {
    title: 'Blog Post Title',
    description: 'Description for social sharing',
    images: ['/images/blog-post.jpg'],
  },
};

export default function BlogPage() {
  return <div>Blog content</div>;
}""",
        docs="https://nextjs.org/docs/app/building-your-application/optimizing/metadata",
    ),
    Rule(
        id="inefficient-route-handlers",
        name="Inefficient Route Handlers",
        description="Route handlers without edge runtime or proper caching headers",
        pattern=Predicate(_inefficient_route_handlers),
        severity=Severity.WARNING,
        category=Category.ROUTING,
        recommendation="Use edge runtime and set appropriate caching headers for route handlers.",
        code_example="""// Before
export async function GET(request) {
  const data = await fetchData();
  return Response.json(data);
}

// After
export const runtime = 'edge';
export const revalidate = 3600; // 1 hour

export async function GET(request) {
  const data = await fetchData();
  return Response.json(data, {
    headers: {
      'Cache-Control': 'public, max-age=3600, s-maxage=86400',
    },
  });
}""",
        docs="https://nextjs.org/docs/app/building-your-application/routing/route-handlers",
    ),
    Rule(
        id="client-fetch-without-revalidation",
        name="Client-side fetch without revalidation",
        description="Using fetch in client components without proper revalidation strategy",
        pattern=Predicate(_client_fetch_without_revalidation),
        severity=Severity.INFO,
        category=Category.DATA,
        recommendation=(
            "Use SWR, React Query, or Next.js data fetching patterns for better "
            "caching and revalidation."
        ),
        code_example="""// Before
"use client";
import { useState, useEffect } from 'react';

export function UserProfile({ userId }) {
  const [user, setUser] = useState(null);

  useEffect(() => {
    fetch(`/api/users/${userId}`)
      .then(res => res.json())
      .then(data => setUser(data));
  }, [userId]);

  return <div>{user?.name}</div>;
}

// After - Using SWR
"use client";
import useSWR from 'swr';

const fetcher = (url) => fetch(url).then(res => res.json());

export function UserProfile({ userId }) {
  const { data: user, error, isLoading } = useSWR(
    `/api/users/${userId}`,
    fetcher
  );

  if (isLoading) return <div>Loading...</div>;
  if (error) return <div>Error loading user</div>;

  return <div>{user?.name}</div>;
}""",
        docs="https://nextjs.org/docs/app/building-your-application/data-fetching/fetching-caching-and-revalidating",
    ),
    Rule(
        id="non-dynamic-imports",
        name="Non-dynamic imports in client components",
        description="Client components importing server-only code",
        pattern=Predicate(_non_dynamic_imports),
        severity=Severity.CRITICAL,
        category=Category.IMPORTS,
        recommendation="Avoid importing server-only code in client components.",
        code_example="""// Before - Client Component
"use client";
import { getUser } from '../lib/db.server';

export default function UserProfile({ userId }) {
  const user = getUser(userId);
  return <div>{user.name}</div>;
}

// After - Better Pattern
// UserProfile.tsx (client component)
"use client";

export default function UserProfile({ user }) {
  return <div>{user.name}</div>;
}

// page.tsx (server component)
import { getUser } from '../lib/db.server';
import UserProfile from './UserProfile';

export default async function Page({ params }) {
  const user = await getUser(params.id);
  return <UserProfile user={user} />;
}""",
        docs="https://nextjs.org/docs/app/building-your-application/rendering/composition-patterns",
    ),
    Rule(
        id="missing-error-boundary",
        name="Missing error boundary",
        description="Components that fetch data without error handling",
        pattern=Predicate(_missing_error_boundary),
        severity=Severity.WARNING,
        category=Category.RENDERING,
        recommendation="Add error handling with error.js files or try/catch blocks.",
        code_example="""// Before
export default async function Page() {
  const data = await fetch('/api/data');
  const posts = await data.json();

  return <PostList posts={posts} />;
}

// After - Using error.js
// error.tsx (in the same directory)
'use client';

export default function Error({ error, reset }) {
  return (
    <div>
      <h2>Something went wrong!</h2>
      <button onClick={reset}>Try again</button>
    </div>
  );
}""",
        docs="https://nextjs.org/docs/app/building-your-application/routing/error-handling",
    ),
    Rule(
        id="improper-link-usage",
        name="Improper Link usage",
        description="Using a tags instead of Next.js Link component for internal navigation",
        pattern=TextPattern(
            re.compile(
                r"""<a\s+[^>]*href=["']/|<a\s+[^>]*href=["'][^"':]+["']""", re.IGNORECASE
            )
        ),
        severity=Severity.WARNING,
        category=Category.ROUTING,
        recommendation="Use the Next.js Link component for client-side navigation between routes.",
        code_example="""// Before
<a href="/about">About</a>

// After
import Link from 'next/link';

<Link href="/about">About</Link>""",
        docs="https://nextjs.org/docs/app/building-your-application/routing/linking-and-navigating",
    ),
)

_RULES_BY_ID: dict[str, Rule] = {rule.id: rule for rule in PERFORMANCE_RULES}


def get_rule(rule_id: str) -> Rule:
    """Return the rule with the given id. Raises KeyError if unknown."""
    return _RULES_BY_ID[rule_id]
